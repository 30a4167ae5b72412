"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .karma_reconciler import KarmaReconciler
from .karma_service import KarmaService
from .vote_service import VoteService

__all__ = [
    "JWTService",
    "KarmaReconciler",
    "KarmaService",
    "Service",
    "VoteService",
]
