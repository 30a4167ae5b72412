"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable pydantic model.

    Votes, ledger entries and audit entries are never mutated in place;
    changes produce a new instance through ``model_copy``.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # Handle and other root value objects
    )
