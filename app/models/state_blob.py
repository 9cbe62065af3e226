"""StateBlob model: the whole app state serialized under one key."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class StateBlob(Base):
    """Key-value row holding one JSON document.

    Single user: only the configured storage key is ever written.
    """

    __tablename__ = "state_blobs"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    # AppState.model_dump_json()
    data: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
