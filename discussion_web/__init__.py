"""
Discussion Web

Startup layer of the discussion application: configuration, storage wiring
and the request pipeline.
"""
