# src/models/tracker.py
from __future__ import annotations

import datetime as dt
import enum
from typing import Optional

from sqlalchemy import Date, DateTime, Enum as SqlEnum, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.db.database import Base


class Severity(str, enum.Enum):
    mild = "mild"
    moderate = "moderate"
    severe = "severe"


class Symptom(Base):
    __tablename__ = "tracker_symptoms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # opaque id handed over by the auth layer
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    severity: Mapped[Severity] = mapped_column(
        SqlEnum(Severity, name="symptom_severity"),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )


class Meal(Base):
    __tablename__ = "tracker_meals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    meal: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )


class Medication(Base):
    __tablename__ = "tracker_medications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    medication: Mapped[str] = mapped_column(String(255), nullable=False)
    dose: Mapped[str] = mapped_column(String(120), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )


class Mood(Base):
    __tablename__ = "tracker_moods"

    # one mood per user per day; writes go through an upsert on this key
    __table_args__ = (
        UniqueConstraint("owner_id", "date", name="uq_tracker_moods_owner_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    mood: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
