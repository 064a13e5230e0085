# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from app.auth import get_current_user, get_db
from app.errors import ValidationError
from app.models.user import User
from app.repositories.journal_repository import SqlAlchemyJournalRepository
from app.schemas.journal_schemas import (
    AnalyticsReport,
    EntryListResponse,
    EntryResponse,
    JournalEntryCreate,
    parse_entry_form,
    validation_details,
)
from app.services.analytics import AnalyticsEngine
from app.services.journal_store import JournalStore
from app.services.photo_store import LocalPhotoStore

router = APIRouter(prefix="/journal", tags=["Journal"])


def get_journal_store(db: Session = Depends(get_db)) -> JournalStore:
    return JournalStore(SqlAlchemyJournalRepository(db))


def get_analytics_engine(db: Session = Depends(get_db)) -> AnalyticsEngine:
    return AnalyticsEngine(SqlAlchemyJournalRepository(db))


def get_photo_store(request: Request) -> LocalPhotoStore:
    return request.app.state.photo_store


async def _read_entry_fields(request: Request):
    """Returns (fields, photo upload or None) from a multipart/form or JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise ValidationError("Request body is not valid JSON") from e
        try:
            return JournalEntryCreate.model_validate(body), None
        except PydanticValidationError as e:
            raise ValidationError("Validation failed", details=validation_details(e)) from e

    form = await request.form()
    photo = form.get("photo")
    if not isinstance(photo, UploadFile) or not photo.filename:
        photo = None
    return parse_entry_form(form), photo


@router.post("/entries", status_code=201, response_model=EntryResponse)
async def create_entry(
    request: Request,
    user: User = Depends(get_current_user),
    store: JournalStore = Depends(get_journal_store),
    photos: LocalPhotoStore = Depends(get_photo_store),
):
    fields, photo = await _read_entry_fields(request)

    photo_ref = None
    if photo is not None:
        # one byte past the limit is enough for the store to reject it
        data = await photo.read(photos.max_bytes + 1)
        photo_ref = await run_in_threadpool(photos.save, photo.filename, photo.content_type, data)

    try:
        entry = await run_in_threadpool(store.create_entry, user.id, fields, photo_ref)
    except Exception:
        # no row points at the upload, so drop it
        if photo_ref is not None:
            await run_in_threadpool(photos.delete, photo_ref)
        raise
    return {"message": "Journal entry created successfully", "entry": entry}


@router.get("/entries", response_model=EntryListResponse)
def list_entries(
    month: Optional[int] = Query(None, description="Month 1-12, requires year"),
    year: Optional[int] = Query(None, description="Four-digit year, requires month"),
    user: User = Depends(get_current_user),
    store: JournalStore = Depends(get_journal_store),
):
    return {"entries": store.list_entries(user.id, month=month, year=year)}


@router.get("/entries/{entry_id}", response_model=EntryResponse)
def get_entry(
    entry_id: int,
    user: User = Depends(get_current_user),
    store: JournalStore = Depends(get_journal_store),
):
    return {"entry": store.get_entry(entry_id, user.id)}


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: int,
    user: User = Depends(get_current_user),
    store: JournalStore = Depends(get_journal_store),
):
    store.delete_entry(entry_id, user.id)
    return {"message": "Journal entry deleted successfully"}


@router.get("/analytics", response_model=AnalyticsReport)
def analytics(
    period: str = Query("week", description="week, month or all"),
    user: User = Depends(get_current_user),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    return engine.compute_analytics(user.id, period)
