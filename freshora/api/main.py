"""
Name: FastAPI Application (Freshora API)

Responsibilities:
  - Build the app: middleware, routers, exception handlers
  - Lifespan: open/close the Postgres pool and run the optional demo seed
  - Operational endpoints: /healthz and /metrics

Collaborators:
  - auth_routes / admin_routes: business endpoints
  - RequestContextMiddleware: request id, per-request log and metrics
  - container.get_user_repository: seed target (memory or Postgres)

Notes:
  - In-memory storage (APP_ENV=test or STORAGE_BACKEND=memory) never opens
    the pool; /healthz then reports db="memory"
  - Middleware added last runs first: CORS answers preflights before the
    request context is set
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_demo import ensure_dev_demo
from ..container import get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import close_pool, init_pool, ping
from .admin_routes import TOTAL_COUNT_HEADER
from .admin_routes import router as admin_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    storage = "memory" if settings.uses_memory_storage() else "postgres"

    if storage == "postgres":
        init_pool(
            settings.database_url,
            settings.db_pool_min_size,
            settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )
    try:
        demo_users = ensure_dev_demo(
            settings, user_repo=get_user_repository(), password_hasher=hash_password
        )
        logger.info(
            "Freshora API iniciada",
            extra={
                "app_env": settings.app_env,
                "storage": storage,
                "demo_users": len(demo_users),
            },
        )
        yield
    finally:
        if storage == "postgres":
            close_pool()
        logger.info("Freshora API detenida")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Freshora API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registro, login y sesión (JWT)"},
            {"name": "admin", "description": "Dashboard y gestión (solo admin)"},
        ],
    )

    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, TOTAL_COUNT_HEADER],
    )

    application.include_router(auth_router)
    application.include_router(admin_router)
    register_exception_handlers(application)

    @application.get("/healthz", tags=["ops"])
    def healthz(request: Request):
        if get_settings().uses_memory_storage():
            db = "memory"
        else:
            db = "connected" if ping() else "disconnected"
        return {
            "ok": db != "disconnected",
            "db": db,
            "request_id": getattr(request.state, "request_id", None),
        }

    @application.get("/metrics", tags=["ops"], include_in_schema=False)
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return application


app = create_app()
