"""
Static File Middleware Unit Tests
"""

import io
import threading

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from discussion_web.fileproviders import PhysicalFileInfo, PhysicalFileProvider, SynchronousFileProvider
from discussion_web.middleware.static_files import StaticFileMiddleware, _iter_file, get_content_type


def _build_app(provider) -> FastAPI:
    app = FastAPI()
    app.add_middleware(StaticFileMiddleware, file_provider=provider)

    @app.get("/topics")
    async def topics():
        return {"source": "router"}

    @app.post("/site.css")
    async def post_css():
        return {"source": "router"}

    return app


@pytest.fixture
def web_root(tmp_path):
    (tmp_path / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (tmp_path / "data.unknownext").write_text("???", encoding="utf-8")
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "big.bin.png").write_bytes(b"\x89PNG" + b"x" * 200_000)
    return tmp_path


@pytest.fixture(params=["physical", "synchronous"])
def client(request, web_root):
    provider = PhysicalFileProvider(web_root)
    if request.param == "synchronous":
        provider = SynchronousFileProvider(provider)
    return TestClient(_build_app(provider))


class TestGetContentType:
    def test_known_types(self):
        assert get_content_type("site.css") == "text/css"
        assert get_content_type("index.html") == "text/html"

    def test_unknown_type(self):
        assert get_content_type("data.unknownext") is None


class TestStaticFileMiddleware:
    """Serving behaviour for both providers."""

    def test_serves_file(self, client):
        response = client.get("/site.css")

        assert response.status_code == 200
        assert response.text == "body { margin: 0; }"
        assert response.headers["content-type"].startswith("text/css")
        assert response.headers["content-length"] == str(len("body { margin: 0; }"))
        assert response.headers["last-modified"].endswith("GMT")

    def test_serves_large_file_in_chunks(self, client):
        response = client.get("/images/big.bin.png")

        assert response.status_code == 200
        assert len(response.content) == 200_004
        assert response.content.startswith(b"\x89PNG")

    def test_head_returns_headers_only(self, client):
        response = client.head("/site.css")

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["content-length"] == str(len("body { margin: 0; }"))

    def test_router_handles_unmatched_paths(self, client):
        response = client.get("/topics")

        assert response.status_code == 200
        assert response.json() == {"source": "router"}

    def test_missing_file_falls_through_to_404(self, client):
        assert client.get("/missing.css").status_code == 404

    def test_directory_falls_through(self, client):
        assert client.get("/images").status_code == 404

    def test_unknown_content_type_not_served(self, client):
        assert client.get("/data.unknownext").status_code == 404

    def test_other_methods_go_to_router(self, client):
        response = client.post("/site.css")

        assert response.status_code == 200
        assert response.json() == {"source": "router"}

    def test_traversal_is_not_served(self, client):
        assert client.get("/../secret.txt").status_code == 404

    def test_null_byte_in_path_is_not_served(self, client):
        assert client.get("/site%00.css").status_code == 404


class RecordingFileProvider(PhysicalFileProvider):
    """Physical provider remembering which thread looked files up."""

    def __init__(self, root):
        super().__init__(root)
        self.lookup_threads = []

    def get_file_info(self, subpath):
        self.lookup_threads.append(threading.get_ident())
        return super().get_file_info(subpath)


class CountingFileInfo:
    def __init__(self, content: bytes):
        self.content = content
        self.opened = 0
        self.streams = []

    def create_read_stream(self):
        self.opened += 1
        stream = io.BytesIO(self.content)
        self.streams.append(stream)
        return stream


@pytest.mark.asyncio
async def test_lookup_runs_off_the_event_loop(web_root):
    provider = RecordingFileProvider(web_root)
    transport = ASGITransport(app=_build_app(provider))

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/site.css")

    assert response.status_code == 200
    assert provider.lookup_threads
    assert threading.get_ident() not in provider.lookup_threads


def test_stream_opened_only_when_body_is_iterated():
    file_info = CountingFileInfo(b"a" * 10)

    chunks = _iter_file(file_info, chunk_size=4)
    assert file_info.opened == 0

    assert list(chunks) == [b"aaaa", b"aaaa", b"aa"]
    assert file_info.opened == 1
    assert file_info.streams[0].closed


def test_head_does_not_open_the_file(web_root, monkeypatch):
    opened = []
    original = PhysicalFileInfo.create_read_stream

    def recording(self):
        opened.append(self.name)
        return original(self)

    monkeypatch.setattr(PhysicalFileInfo, "create_read_stream", recording)
    client = TestClient(_build_app(PhysicalFileProvider(web_root)))

    assert client.head("/site.css").status_code == 200
    assert opened == []
    assert client.get("/site.css").status_code == 200
    assert opened == ["site.css"]
