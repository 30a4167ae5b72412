"""Strongly typed identifiers for Agora domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# Ledger and audit identifiers
KarmaEventId = NewType("KarmaEventId", UUID)
AuditEntryId = NewType("AuditEntryId", UUID)
