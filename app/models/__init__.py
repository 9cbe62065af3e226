"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.state_blob import StateBlob

__all__ = [
    "StateBlob",
]
