#!/usr/bin/env python3
"""Rebuild every user's karma from the votes on their content.

Run after restoring a backup, after manual database edits, or on a schedule
to repair drift between the karma ledger and the votes. Prints the top users
when done.

Usage:
    python scripts/recalculate_karma.py [--top N]
"""

import argparse
import asyncio
import sys

import logfire

from agora.config import Settings
from agora.domain.repository import UserRepository
from agora.domain.service import KarmaReconciler, KarmaService
from agora.util.di.container import create_container
from agora.util.logging import setup_logging
from agora.util.observability import configure_logfire


async def recalculate(top: int) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            reconciler = await request_container.get(KarmaReconciler)
            results = await reconciler.recompute_all()
            print(f"Recalculated karma for {len(results)} users")

        # Fresh request scope so the leaderboard reads committed data
        async with container() as request_container:
            karma_service = await request_container.get(KarmaService)
            user_repository = await request_container.get(UserRepository)

            print("\nTop users by karma:")
            for rank, entry in enumerate(
                await karma_service.get_leaderboard(top), start=1
            ):
                user = await user_repository.find_by_id(entry.user_id)
                handle = user.handle.root if user else str(entry.user_id)
                print(
                    f"{rank}. {handle}: {entry.total_karma} total karma "
                    f"(posts {entry.post_karma}, comments {entry.comment_karma})"
                )
    finally:
        await container.close()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--top", type=int, default=10, help="leaderboard size")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        with logfire.span("recalculate_karma", top=args.top):
            return asyncio.run(recalculate(args.top))
    except Exception as e:
        logfire.error(
            "Karma recalculation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
