# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, List, Optional, Tuple, Union

from app.errors import ValidationError
from app.repositories.journal_repository import JournalRepository
from app.schemas.journal_schemas import AnalyticsPeriod, AnalyticsReport, EmotionGroup
from app.utils.time_utils import utcnow

DEFAULT_EMOTION = "Neutral"

WINDOWS = {
    AnalyticsPeriod.week: timedelta(days=7),
    AnalyticsPeriod.month: timedelta(days=30),
    AnalyticsPeriod.all: None,
}


def _round1(value: float) -> float:
    # half-up, so 6.25 reports as 6.3
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class AnalyticsEngine:
    """Read-only aggregation over a user's journal entries."""

    def __init__(self, repo: JournalRepository, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    @staticmethod
    def parse_period(period: Union[str, AnalyticsPeriod]) -> AnalyticsPeriod:
        try:
            return AnalyticsPeriod(period)
        except ValueError as e:
            raise ValidationError("period must be one of: week, month, all", field="period") from e

    def compute_analytics(self, user_id: int, period: Union[str, AnalyticsPeriod] = AnalyticsPeriod.week) -> AnalyticsReport:
        period = self.parse_period(period)
        window = WINDOWS[period]
        since = self.clock() - window if window is not None else None

        # newest first, so groups come out ordered by their latest entry
        entries = self.repo.list_owned(user_id, start=since)

        groups: Dict[Tuple[Optional[str], str], Dict] = {}
        intensities: List[int] = []
        for entry in entries:
            day = entry.created_at.date().isoformat()
            key = (entry.primary_emotion, day)
            group = groups.setdefault(key, {"count": 0, "intensities": []})
            group["count"] += 1
            if entry.intensity is not None:
                group["intensities"].append(entry.intensity)
                intensities.append(entry.intensity)

        emotion_counts: Dict[str, int] = {}
        rows: List[EmotionGroup] = []
        for (emotion, day), group in groups.items():
            if emotion is not None:
                emotion_counts[emotion] = emotion_counts.get(emotion, 0) + group["count"]
            group_intensity = None
            if group["intensities"]:
                group_intensity = _round1(sum(group["intensities"]) / len(group["intensities"]))
            rows.append(EmotionGroup(emotion=emotion, intensity=group_intensity, date=day, count=group["count"]))

        avg_intensity = _round1(sum(intensities) / len(intensities)) if intensities else 0

        return AnalyticsReport(
            period=period,
            total_entries=len(entries),
            avg_intensity=avg_intensity,
            most_common_emotion=most_common(emotion_counts),
            emotion_counts=emotion_counts,
            entries=rows,
        )


def most_common(counts: Dict[str, int]) -> str:
    """Largest count wins; ties go to the label seen first."""
    best, best_count = DEFAULT_EMOTION, 0
    for emotion, count in counts.items():
        if count > best_count:
            best, best_count = emotion, count
    return best
