#!/usr/bin/env python3
"""Apply Alembic migrations up to head, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from agora.config import Settings
from agora.util.logging import setup_logging
from agora.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database schema to the latest revision."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("run_migrations", environment=settings.environment):
        try:
            # env.py reads the URL from DATABASE__URL
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, "head")
            logfire.info("Database schema is at head")
            return 0

        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy fails instead of serving a stale schema
            raise


if __name__ == "__main__":
    sys.exit(main())
