"""
Discussion Web Application Entry Point

Builds the configuration, wires the storage backend and assembles the
request pipeline: developer error page, static files, then routing.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from discussion_web.api import health_router
from discussion_web.common.errors import AppError
from discussion_web.config import Settings, get_settings
from discussion_web.configuration import Configuration
from discussion_web.fileproviders import create_file_provider
from discussion_web.hosting import HostingEnvironment
from discussion_web.logging_config import setup_logging
from discussion_web.middleware import StaticFileMiddleware
from discussion_web.services.storage import add_data_services

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError):
    """
    Handle application custom exceptions

    Details are exposed while the developer error page is enabled.
    """
    include_details = request.app.debug
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=include_details),
    )


def create_app(
    hosting_environment: Optional[HostingEnvironment] = None,
    settings: Optional[Settings] = None,
    runtime: Optional[str] = None,
) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        hosting_environment: Content root and environment name (from the process environment when None)
        settings: Settings override (loaded for the hosting environment when None)
        runtime: Interpreter implementation override (detected when None)

    Returns:
        FastAPI: Configured application
    """
    if hosting_environment is None:
        hosting_environment = HostingEnvironment.from_environ()
        if settings is None:
            settings = get_settings()
    if settings is None:
        settings = Settings.for_environment(hosting_environment)
    configuration = Configuration.from_settings(settings)

    setup_logging(settings)

    storage_backend = add_data_services(settings)

    web_root = hosting_environment.web_root(settings.WEB_ROOT)
    file_provider = create_file_provider(web_root, settings.SYNC_FILE_RUNTIME, runtime)

    # Developer error page in every environment; the production handler stays disabled.
    # Known risk: tracebacks reach clients outside Development too.
    if hosting_environment.is_development():
        developer_exception_page = True
    else:
        developer_exception_page = True

    app = FastAPI(
        title=settings.APP_NAME,
        description="Discussion web application",
        version="0.1.0",
        debug=developer_exception_page,
    )
    app.state.hosting_environment = hosting_environment
    app.state.configuration = configuration
    app.state.settings = settings
    app.state.storage_backend = storage_backend
    app.state.file_provider = file_provider

    app.add_exception_handler(AppError, app_error_handler)

    app.add_middleware(StaticFileMiddleware, file_provider=file_provider)

    app.include_router(health_router)

    logger.info(
        f"Application configured: environment={hosting_environment.environment_name}, "
        f"content_root={hosting_environment.content_root}, storage={storage_backend.name}"
    )
    return app


def main() -> None:
    """Run the application with uvicorn until terminated."""
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
