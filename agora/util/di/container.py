"""Production container shared by the API and the maintenance scripts."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build a container wired to PostgreSQL and the real services.

    ``scripts/recalculate_karma.py`` uses it without FastAPI; the extra
    FastapiProvider is harmless there and lets routes resolve ``Request``.
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve every request of app from a request scope of container."""
    setup_dishka(container, app)
