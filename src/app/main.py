from fastapi import FastAPI

from app.config import Settings, settings
from app.handlers import register_exception_handlers
from app.logging import get_logger
from app.middleware import RequestIDMiddleware

logger = get_logger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the API: middleware, fault handlers and the health probe.

    Routers for new resources are included here; the fault handlers cover
    whatever they raise. Only the API title and version are read from
    ``app_settings``: logging is configured once per process from the global
    settings when app.logging is imported, so ``log_level`` here has no effect.
    """
    app = FastAPI(title=app_settings.api_title, version=app_settings.api_version)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe for load balancers and container orchestrators."""
        return {"status": "ok"}

    logger.info("app_created", title=app_settings.api_title, version=app_settings.api_version)
    return app


app = create_app()
