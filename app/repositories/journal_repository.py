# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.journal import JournalEntry


class JournalRepository(ABC):
    """Storage seam for journal entries. Every read and delete is owner-scoped."""

    @abstractmethod
    def add(self, entry: JournalEntry) -> JournalEntry:
        ...

    @abstractmethod
    def get_owned(self, entry_id: int, user_id: int) -> Optional[JournalEntry]:
        ...

    @abstractmethod
    def list_owned(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[JournalEntry]:
        """Entries with ``start <= created_at < end``, newest first."""

    @abstractmethod
    def delete_owned(self, entry_id: int, user_id: int) -> int:
        """Delete in one statement and return the number of rows removed."""


class SqlAlchemyJournalRepository(JournalRepository):
    def __init__(self, db: Session):
        self.db = db

    def add(self, entry: JournalEntry) -> JournalEntry:
        try:
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entry)
        return entry

    def get_owned(self, entry_id: int, user_id: int) -> Optional[JournalEntry]:
        return (
            self.db.query(JournalEntry)
            .filter(JournalEntry.id == entry_id, JournalEntry.user_id == user_id)
            .first()
        )

    def list_owned(self, user_id, start=None, end=None):
        query = self.db.query(JournalEntry).filter(JournalEntry.user_id == user_id)
        if start is not None:
            query = query.filter(JournalEntry.created_at >= start)
        if end is not None:
            query = query.filter(JournalEntry.created_at < end)
        return query.order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc()).all()

    def delete_owned(self, entry_id: int, user_id: int) -> int:
        try:
            count = (
                self.db.query(JournalEntry)
                .filter(JournalEntry.id == entry_id, JournalEntry.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return count
