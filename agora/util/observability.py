"""Logfire setup for the API, the scripts and the database engine.

Services log through ``logfire`` directly:

    logfire.info("Vote applied", voter_id=str(voter_id), karma_change=delta)

    with logfire.span("karma_reconciler.recompute", user_id=str(user_id)):
        ...

This module only configures Logfire once per process and attaches the
FastAPI and SQLAlchemy integrations.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import Settings

SERVICE_NAME = "agora-api"
SERVICE_VERSION = "0.1.0"

# Auth cookie carries a bearer JWT
SCRUB_PATTERNS = ["auth_token"]

# Probed by the load balancer every few seconds
UNTRACED_URLS = ["/health"]


def _send_to_logfire(settings: Settings) -> bool:
    """Explicit flag wins, otherwise send whenever a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Without OBSERVABILITY__LOGFIRE_TOKEN everything stays on the console.
    OBSERVABILITY__SEND_TO_LOGFIRE overrides the token-based default.

    Args:
        settings: Application settings
    """
    send_to_logfire = _send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
        karma_floor=settings.karma.floor,
        allow_self_vote=settings.karma.allow_self_vote,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health probes.

    Headers are not captured since the auth cookie travels in them.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        result = {**attributes, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued by the vote and karma repositories.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Span context as SQL comments for pg_stat_statements
    )
    logfire.debug(
        "SQLAlchemy instrumented", url=engine.url.render_as_string(hide_password=True)
    )
