# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the User Management API.
# create_app() wires the repository, services and controllers, mounts the
# controller routers, and serves the generated OpenAPI document.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
import platform
import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

from app.config import Settings, settings
from app.exceptions import register_exception_handlers
from app.routers import HealthController, UserController
from core.services.user_service import UserService
from lib.logger import LoggerService, configure_logging
from lib.repository import Repository
from lib.supabase_client import SupabaseRepository
from lib.utils import banner, mask_database_url
from swagger_docs import (
    ControllerBase,
    SwaggerConfig,
    SwaggerService,
    ensure_routes_declared,
)
from swagger_docs.config import ServerEntry

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def build_swagger_service(app_settings: Settings, controllers: list[ControllerBase]) -> SwaggerService:
    """Create the document generator for the given controllers."""
    config = SwaggerConfig(
        title=app_settings.SWAGGER_TITLE,
        version=app_settings.SWAGGER_VERSION,
        description=app_settings.SWAGGER_DESCRIPTION,
        servers=[
            ServerEntry(
                url=app_settings.SERVER_URL,
                description=f"{app_settings.ENVIRONMENT.capitalize()} server",
            )
        ],
        base_path=app_settings.API_PREFIX,
    )
    service = SwaggerService(config)
    for controller in controllers:
        service.add_controller(controller)
    return service


def create_app(
    repository: Repository | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        repository: Users data-access object (defaults to Supabase)
        app_settings: Settings to use instead of the global instance

    Raises:
        RouteDeclarationError: If a controller declares a malformed route
    """
    cfg = app_settings or settings
    configure_logging(
        "DEBUG" if cfg.DEBUG else cfg.LOG_LEVEL,
        output_to_file=cfg.LOG_OUTPUT_FILE,
        log_file_path=cfg.LOG_FILE_PATH,
    )

    repository = repository or SupabaseRepository(cfg.USERS_TABLE)
    log_service = LoggerService("app")
    prefix = cfg.API_PREFIX

    # -------------------------------------------------------------------------
    # Controllers
    # -------------------------------------------------------------------------

    controllers: list[ControllerBase] = [
        HealthController(repository),
        UserController(
            UserService(repository, log_service),
            log_service,
            default_page_size=cfg.DEFAULT_PAGE_SIZE,
            max_page_size=cfg.MAX_PAGE_SIZE,
        ),
    ]
    ensure_routes_declared(controllers)

    swagger_service = build_swagger_service(cfg, controllers)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: connect the repository and print the banner
        - Shutdown: disconnect the repository
        """
        await repository.connect()
        logger.info(banner(
            port=cfg.API_PORT,
            env=cfg.ENVIRONMENT,
            db_url_masked=mask_database_url(cfg.SUPABASE_URL),
            python_version=platform.python_version(),
            api_prefix=prefix,
        ))
        try:
            ok, message = await repository.health_check()
        except Exception as e:
            ok, message = False, str(e)
        if not ok:
            logger.warning(f"Database connection warning: {message}")

        yield

        logger.info("Shutting down User Management API")
        await repository.disconnect()

    # Built-in schema routes are disabled; the generated document replaces them
    app = FastAPI(
        title=cfg.SWAGGER_TITLE,
        version=cfg.SWAGGER_VERSION,
        description=cfg.SWAGGER_DESCRIPTION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.repository = repository
    app.state.controllers = controllers

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list if cfg.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or _request_id()
        request.state.request_id = request_id
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            log_service.http(request.method, request.url.path, 500, duration_ms, {"requestId": request_id})
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        log_service.http(
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            {"requestId": request_id},
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    for controller in controllers:
        app.include_router(controller.router, prefix=prefix + controller.base_path)

    # =========================================================================
    # API Documentation
    # =========================================================================

    # Generated once; served as-is for the life of the process
    app.state.openapi_spec = swagger_service.generate_spec()
    logger.info(
        f"OpenAPI document ready: {len(app.state.openapi_spec['paths'])} path(s) "
        f"at {prefix}/openapi.json"
    )

    @app.get(f"{prefix}/openapi.json", include_in_schema=False)
    async def openapi_document() -> JSONResponse:
        return JSONResponse(app.state.openapi_spec)

    @app.get(f"{prefix}/docs", include_in_schema=False)
    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(
            openapi_url=f"{prefix}/openapi.json",
            title=f"{cfg.SWAGGER_TITLE} - Swagger UI",
            swagger_ui_parameters={"docExpansion": "list", "filter": True, "tryItOutEnabled": True},
        )

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": cfg.SWAGGER_TITLE,
            "version": cfg.SWAGGER_VERSION,
            "docs": f"{prefix}/docs",
            "health": f"{prefix}/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
