# src/services/tracker_analysis.py
"""
Summary statistics over one user's tracker records.

Pure functions: no session, no I/O. The caller fetches and scopes the
records; anything exposing the record attributes (ORM rows, pydantic
models) is accepted.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from src.models.tracker import Severity
from src.schemas.schema_tracker import (
    AnalysisSummary,
    MedicationSummary,
    MoodSummary,
    SeverityCounts,
    SymptomCount,
    SymptomSummary,
    coerce_day,
)

logger = logging.getLogger(__name__)

MOST_COMMON_LIMIT = 3


def _severity_key(value) -> str:
    return value.value if isinstance(value, Severity) else str(value)


def summarize_symptoms(symptoms: Iterable) -> SymptomSummary:
    symptoms = list(symptoms)

    by_severity = {s.value: 0 for s in Severity}
    descriptions: Counter[str] = Counter()
    for s in symptoms:
        key = _severity_key(s.severity)
        by_severity[key] = by_severity.get(key, 0) + 1
        descriptions[s.description] += 1

    # Counter.most_common is a stable sort: equal counts keep first-seen order
    most_common = [
        SymptomCount(description=desc, count=count)
        for desc, count in descriptions.most_common(MOST_COMMON_LIMIT)
    ]

    return SymptomSummary(
        total=len(symptoms),
        by_severity=SeverityCounts(**by_severity),
        most_common=most_common,
    )


def summarize_medications(medications: Iterable) -> MedicationSummary:
    medications = list(medications)
    adherence_days = {coerce_day(m.date) for m in medications}
    return MedicationSummary(total=len(medications), adherence_days=len(adherence_days))


def summarize_moods(moods: Iterable) -> MoodSummary:
    moods = list(moods)
    by_mood: dict[str, int] = {}
    for m in moods:
        by_mood[m.mood] = by_mood.get(m.mood, 0) + 1
    return MoodSummary(total=len(moods), by_mood=by_mood)


def analyze_tracker(symptoms: Iterable, meals: Iterable, medications: Iterable, moods: Iterable) -> AnalysisSummary:
    """
    Meals are accepted for a uniform signature but not aggregated;
    they only appear in the report listings.
    """
    summary = AnalysisSummary(
        symptom_summary=summarize_symptoms(symptoms),
        medication_summary=summarize_medications(medications),
        mood_summary=summarize_moods(moods),
    )
    logger.info(
        "[tracker_analysis] symptoms=%d medications=%d adherence_days=%d moods=%d",
        summary.symptom_summary.total,
        summary.medication_summary.total,
        summary.medication_summary.adherence_days,
        summary.mood_summary.total,
    )
    return summary
