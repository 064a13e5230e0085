# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, JsonValue, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.errors import ValidationError
from app.models.journal import STRUCTURED_FIELDS

INTENSITY_MIN, INTENSITY_MAX = 1, 10
CONFIDENCE_MIN, CONFIDENCE_MAX = 0, 100

LIST_FIELDS = ("emotions", "insights", "tips")
# analysis fields clients usually send as plain text
TEXT_STRUCTURED_FIELDS = ("quick_insight", "analysis_summary")


class JournalEntryCreate(BaseModel):
    """Fields a client may submit for a new entry."""

    model_config = ConfigDict(extra="ignore")

    mood: Optional[str] = None
    notes: Optional[str] = None
    emotions: Optional[List[str]] = None
    primary_emotion: Optional[str] = None
    secondary_emotion: Optional[str] = None
    intensity: Optional[int] = Field(None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    insights: Optional[List[str]] = None
    tips: Optional[List[str]] = None
    confidence: Optional[int] = Field(None, ge=CONFIDENCE_MIN, le=CONFIDENCE_MAX)

    # 🧠 Analysis payloads: any JSON value, kept exactly as submitted
    facial_analysis: Optional[JsonValue] = None
    mood_factors: Optional[JsonValue] = None
    wellness_indicators: Optional[JsonValue] = None
    recommendations: Optional[JsonValue] = None
    quick_insight: Optional[JsonValue] = None
    detailed_insights: Optional[JsonValue] = None
    mood_trends: Optional[JsonValue] = None
    chart_data: Optional[JsonValue] = None
    analysis_summary: Optional[JsonValue] = None
    additional_data: Optional[JsonValue] = None


class JournalEntryOut(JournalEntryCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int = Field(validation_alias=AliasChoices("user_id", "userId"), serialization_alias="userId")
    photo_path: Optional[str] = Field(
        None, validation_alias=AliasChoices("photo_path", "photoPath"), serialization_alias="photoPath"
    )
    created_at: datetime

    # absent lists are reported as empty lists
    emotions: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def empty_list_for_none(cls, value):
        return [] if value is None else value


class EntryResponse(BaseModel):
    message: Optional[str] = None
    entry: JournalEntryOut


class EntryListResponse(BaseModel):
    entries: List[JournalEntryOut]


class AnalyticsPeriod(str, Enum):
    week = "week"
    month = "month"
    all = "all"


class EmotionGroup(BaseModel):
    emotion: Optional[str]
    intensity: Optional[float]
    date: str
    count: int


class AnalyticsReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period: AnalyticsPeriod
    total_entries: int = Field(alias="totalEntries")
    avg_intensity: float = Field(alias="avgIntensity")
    most_common_emotion: str = Field(alias="mostCommonEmotion")
    emotion_counts: Dict[str, int] = Field(alias="emotionCounts")
    entries: List[EmotionGroup]


def validation_details(exc) -> List[Dict[str, Any]]:
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        details.append({"field": field, "issue": err.get("msg", "invalid value")})
    return details


def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")


def _json_loads(raw: str) -> Any:
    return json.loads(raw, parse_constant=_reject_constant)


def parse_entry_form(form: Mapping[str, Any]) -> JournalEntryCreate:
    """
    Build a JournalEntryCreate from multipart form values.
    List fields arrive as JSON arrays encoded in text. Structured fields are
    JSON-decoded when they parse and kept as plain strings otherwise;
    quick_insight and analysis_summary only decode to objects or arrays.
    """
    data: Dict[str, Any] = {}
    errors: List[Dict[str, Any]] = []

    for name in JournalEntryCreate.model_fields:
        raw = form.get(name)
        if raw is None or not isinstance(raw, str):
            continue
        if raw == "":
            continue

        if name in LIST_FIELDS:
            try:
                data[name] = _json_loads(raw)
            except ValueError:
                errors.append({"field": name, "issue": "must be a JSON array of strings"})
        elif name in STRUCTURED_FIELDS:
            try:
                value = _json_loads(raw)
            except ValueError:
                value = raw
            # "123" or "true" stays text for the text-like fields
            if name in TEXT_STRUCTURED_FIELDS and not isinstance(value, (dict, list)):
                value = raw
            data[name] = value
        else:
            data[name] = raw

    if errors:
        raise ValidationError("Validation failed", details=errors)

    try:
        return JournalEntryCreate.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Validation failed", details=validation_details(e)) from e
