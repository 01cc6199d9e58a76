from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paystub.api.routes import health, paystubs
from paystub.config import get_settings
from paystub.logging import configure_logging, get_logger
from paystub.monitoring import configure_error_monitoring
from paystub.observability import configure_observability

logger = get_logger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    configure_observability(settings)
    configure_error_monitoring(settings)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(paystubs.router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Paystub API running", "environment": settings.env}

    logger.info("app_created", env=settings.env, tax_table_version=settings.tax_table_version)
    return app


app = create_app()
