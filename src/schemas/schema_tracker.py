# src/schemas/schema_tracker.py
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.models.tracker import Severity


def coerce_day(value) -> dt.date:
    """
    Tracker dates are calendar days.
    - date           -> as is
    - datetime       -> converted to UTC (if aware), time dropped
    - "YYYY-MM-DD" / ISO date-time string -> parsed, then as above
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return dt.date.fromisoformat(text)
        return coerce_day(dt.datetime.fromisoformat(text.replace("Z", "+00:00")))
    raise TypeError(f"unsupported date value: {value!r}")


# ---------- request bodies ----------
class _RecordCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        if v is None:
            return v
        try:
            return coerce_day(v)
        except (TypeError, ValueError):
            raise ValueError("date must be YYYY-MM-DD or an ISO date-time")


class _NotesMixin(BaseModel):
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("notes")
    @classmethod
    def empty_notes_to_none(cls, v):
        return v or None


class SymptomCreate(_RecordCreate, _NotesMixin):
    description: str = Field(min_length=1, max_length=255)
    severity: Severity


class MealCreate(_RecordCreate, _NotesMixin):
    meal: str = Field(min_length=1, max_length=255)


class MedicationCreate(_RecordCreate, _NotesMixin):
    medication: str = Field(min_length=1, max_length=255)
    dose: str = Field(min_length=1, max_length=120)


class MoodUpsert(_RecordCreate):
    mood: str = Field(min_length=1, max_length=64)


# ---------- stored records ----------
class _RecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: str
    date: dt.date


class SymptomOut(_RecordOut):
    description: str
    severity: Severity
    notes: Optional[str] = None


class MealOut(_RecordOut):
    meal: str
    notes: Optional[str] = None


class MedicationOut(_RecordOut):
    medication: str
    dose: str
    notes: Optional[str] = None


class MoodOut(_RecordOut):
    mood: str


# ---------- analysis (camelCase on the wire) ----------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeverityCounts(_CamelModel):
    mild: int = 0
    moderate: int = 0
    severe: int = 0


class SymptomCount(_CamelModel):
    description: str
    count: int


class SymptomSummary(_CamelModel):
    total: int = 0
    by_severity: SeverityCounts = Field(default_factory=SeverityCounts)
    most_common: List[SymptomCount] = Field(default_factory=list)


class MedicationSummary(_CamelModel):
    total: int = 0
    adherence_days: int = 0


class MoodSummary(_CamelModel):
    total: int = 0
    by_mood: Dict[str, int] = Field(default_factory=dict)


class AnalysisSummary(_CamelModel):
    symptom_summary: SymptomSummary = Field(default_factory=SymptomSummary)
    medication_summary: MedicationSummary = Field(default_factory=MedicationSummary)
    mood_summary: MoodSummary = Field(default_factory=MoodSummary)
