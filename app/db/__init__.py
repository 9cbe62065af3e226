"""Database package: engine, session, base for the state blob store."""

from app.db.session import async_session_maker, engine, get_db

__all__ = ["async_session_maker", "engine", "get_db"]
