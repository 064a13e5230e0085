# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.errors import InternalError, NotFoundError, ValidationError
from app.models.journal import JournalEntry
from app.repositories.journal_repository import JournalRepository
from app.schemas.journal_schemas import (
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    INTENSITY_MAX,
    INTENSITY_MIN,
    JournalEntryCreate,
    JournalEntryOut,
)
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def month_bounds(month: int, year: int):
    """Return ``[first instant of month, first instant of next month)``.

    The end is None for December of the last representable year.
    """
    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1) if year < datetime.max.year else None
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def _check_range(name: str, value: Optional[int], low: int, high: int):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{name} must be an integer between {low} and {high}", field=name)


class JournalStore:
    """Owner-scoped persistence of journal entries. Entries are never updated."""

    def __init__(self, repo: JournalRepository, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    def create_entry(
        self,
        user_id: int,
        fields: JournalEntryCreate,
        photo_ref: Optional[str] = None,
    ) -> JournalEntryOut:
        # Schema already bounds these, but fields may be built with model_construct
        _check_range("intensity", fields.intensity, INTENSITY_MIN, INTENSITY_MAX)
        _check_range("confidence", fields.confidence, CONFIDENCE_MIN, CONFIDENCE_MAX)

        entry = JournalEntry(
            user_id=user_id,
            photo_path=photo_ref,
            created_at=self.clock(),
            **fields.model_dump(),
        )
        try:
            entry = self.repo.add(entry)
        except SQLAlchemyError as e:
            logger.error(f"🛑 Failed to create journal entry for user {user_id}: {e}", exc_info=True)
            raise InternalError("Failed to create journal entry") from e

        logger.info(f"📝 Journal entry {entry.id} saved for user {user_id}")
        return JournalEntryOut.model_validate(entry)

    def list_entries(
        self,
        user_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[JournalEntryOut]:
        start = end = None
        if month is not None or year is not None:
            if month is None or year is None:
                raise ValidationError(
                    "month and year must be supplied together",
                    field="month" if month is None else "year",
                )
            if not 1 <= month <= 12:
                raise ValidationError("month must be between 1 and 12", field="month")
            if not 1 <= year <= 9999:
                raise ValidationError("year must be a four-digit year", field="year")
            start, end = month_bounds(month, year)

        entries = self.repo.list_owned(user_id, start=start, end=end)
        return [JournalEntryOut.model_validate(entry) for entry in entries]

    def get_entry(self, entry_id: int, user_id: int) -> JournalEntryOut:
        # Missing and foreign entries are reported the same way
        entry = self.repo.get_owned(entry_id, user_id)
        if entry is None:
            raise NotFoundError("Journal entry not found")
        return JournalEntryOut.model_validate(entry)

    def delete_entry(self, entry_id: int, user_id: int) -> None:
        try:
            count = self.repo.delete_owned(entry_id, user_id)
        except SQLAlchemyError as e:
            logger.error(f"🛑 Failed to delete journal entry {entry_id}: {e}", exc_info=True)
            raise InternalError("Failed to delete journal entry") from e

        if count == 0:
            raise NotFoundError("Journal entry not found")
        logger.info(f"🗑️ Journal entry {entry_id} deleted for user {user_id}")
