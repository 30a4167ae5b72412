"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agora.config import AuthSettings, Settings
from agora.interface.api.routes import health, karma, votes
from agora.util.di.container import create_container, setup_di
from agora.util.error import ConfigurationError
from agora.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it.

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()

    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == AuthSettings().jwt_secret
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")

    app_instance = FastAPI(
        title="Agora API",
        description="Vote ledger and karma engine for the Agora forum",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(karma.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configured in conftest.py
app = create_app()
