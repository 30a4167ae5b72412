"""Karma use cases."""

from .common import KarmaStats
from .get_karma import GetKarmaRequest, GetKarmaResponse, GetKarmaUseCase
from .get_karma_history import (
    GetKarmaHistoryRequest,
    GetKarmaHistoryResponse,
    GetKarmaHistoryUseCase,
    KarmaHistoryItem,
)
from .get_leaderboard import (
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetLeaderboardUseCase,
    LeaderboardEntry,
)
from .recalculate_karma import (
    RecalculateKarmaRequest,
    RecalculateKarmaResponse,
    RecalculateKarmaUseCase,
)

__all__ = [
    "GetKarmaHistoryRequest",
    "GetKarmaHistoryResponse",
    "GetKarmaHistoryUseCase",
    "GetKarmaRequest",
    "GetKarmaResponse",
    "GetKarmaUseCase",
    "GetLeaderboardRequest",
    "GetLeaderboardResponse",
    "GetLeaderboardUseCase",
    "KarmaHistoryItem",
    "KarmaStats",
    "LeaderboardEntry",
    "RecalculateKarmaRequest",
    "RecalculateKarmaResponse",
    "RecalculateKarmaUseCase",
]
