
import logging
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.middleware.ratelimit import RateLimitMiddleware, make_key_func
from app.middleware.access_log import access_log_middleware
from app.config import settings
from app.db.session import init_db
from app.errors import register_exception_handlers
from app.auth.routes import router as auth_router
from app.admin.routes import router as admin_router
from app.utils.responses import ok

def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=make_key_func(),
    )
    app.middleware("http")(access_log_middleware)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(admin_router)

    @app.on_event("startup")
    def on_startup():
        init_db()

    @app.get("/health", tags=["health"])
    def health():
        return ok({
            "status": "ok",
            "name": settings.app_name,
            "env": settings.app_env,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    return app

app = create_app()
