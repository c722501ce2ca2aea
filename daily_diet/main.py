# daily_diet/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from daily_diet.core.config import Settings, get_settings
from daily_diet.core.errors import register_exception_handlers
from daily_diet.api.routes.health import router as health_router
from daily_diet.api.routes.users import router as users_router
from daily_diet.api.routes.meals import router as meals_router
from daily_diet.api.routes.metrics import router as metrics_router
from daily_diet.api.deps_auth import API_KEY_HEADER_NAME, SESSION_HEADER_NAME

# Preview deployments of the frontend live on these hosts
LOVABLE_ORIGIN_REGEX = r"https?://([a-z0-9-]+\.)*lovable\.(app|dev)"


def cors_options(settings: Settings) -> dict:
    options = dict(
        allow_credentials=True,  # session cookie
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", API_KEY_HEADER_NAME, SESSION_HEADER_NAME],
    )
    if settings.is_development:
        # any origin is echoed back
        options.update(allow_origins=[], allow_origin_regex=r".*")
    else:
        options.update(allow_origins=settings.cors_origins, allow_origin_regex=LOVABLE_ORIGIN_REGEX)
    return options


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.getLogger("daily_diet").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Meal log with on-diet metrics, email verified accounts and cookie sessions.",
        docs_url=settings.docs_url,
        redoc_url=None,
    )
    app.state.settings = settings
    if settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(CORSMiddleware, **cors_options(settings))
    register_exception_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(meals_router)
    app.include_router(metrics_router)
    return app


app = create_app()
