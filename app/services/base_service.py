"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseError
from app.database import db as db_module


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None) -> None:
        self._owns_session = db is None
        self.db = db or db_module.get_session_factory()()

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(str(exc)) from exc

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        if self._owns_session:
            self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
