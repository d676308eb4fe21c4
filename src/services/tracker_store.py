# src/services/tracker_store.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import List

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.tracker import Meal, Medication, Mood, Symptom
from src.schemas.schema_tracker import MealCreate, MedicationCreate, MoodUpsert, SymptomCreate
from src.services.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def mask_uid(uid: str) -> str:
    if not uid:
        return ""
    if len(uid) <= 10:
        return uid[:3] + "..."
    return uid[:6] + "..." + uid[-4:]


@dataclass
class TrackerRecords:
    """All four record sets of one user, oldest first."""

    symptoms: List[Symptom] = field(default_factory=list)
    meals: List[Meal] = field(default_factory=list)
    medications: List[Medication] = field(default_factory=list)
    moods: List[Mood] = field(default_factory=list)


def _store_operation(name: str):
    """
    Roll back and re-raise as StoreUnavailable on any SQLAlchemyError.
    IntegrityError is passed through: it is a bad write, not an outage.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except IntegrityError:
                db.rollback()
                raise
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception("[tracker_store] %s failed", name)
                raise StoreUnavailable(name) from e

        return wrapper

    return decorator


def _add(db: Session, row):
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _newest_first(model, owner_id: str):
    return (
        select(model)
        .where(model.owner_id == owner_id)
        .order_by(model.date.desc(), model.id.desc())
    )


def _oldest_first(model, owner_id: str):
    return (
        select(model)
        .where(model.owner_id == owner_id)
        .order_by(model.date.asc(), model.id.asc())
    )


# ---------- symptoms ----------
@_store_operation("create symptom")
def create_symptom(db: Session, owner_id: str, body: SymptomCreate) -> Symptom:
    row = _add(
        db,
        Symptom(
            owner_id=owner_id,
            date=body.date,
            description=body.description,
            severity=body.severity,
            notes=body.notes,
        ),
    )
    logger.info("[tracker_store] symptom logged uid=%s id=%d", mask_uid(owner_id), row.id)
    return row


@_store_operation("list symptoms")
def list_symptoms(db: Session, owner_id: str) -> List[Symptom]:
    return db.execute(_newest_first(Symptom, owner_id)).scalars().all()


# ---------- meals ----------
@_store_operation("create meal")
def create_meal(db: Session, owner_id: str, body: MealCreate) -> Meal:
    row = _add(db, Meal(owner_id=owner_id, date=body.date, meal=body.meal, notes=body.notes))
    logger.info("[tracker_store] meal logged uid=%s id=%d", mask_uid(owner_id), row.id)
    return row


@_store_operation("list meals")
def list_meals(db: Session, owner_id: str) -> List[Meal]:
    return db.execute(_newest_first(Meal, owner_id)).scalars().all()


# ---------- medications ----------
@_store_operation("create medication")
def create_medication(db: Session, owner_id: str, body: MedicationCreate) -> Medication:
    row = _add(
        db,
        Medication(
            owner_id=owner_id,
            date=body.date,
            medication=body.medication,
            dose=body.dose,
            notes=body.notes,
        ),
    )
    logger.info("[tracker_store] medication logged uid=%s id=%d", mask_uid(owner_id), row.id)
    return row


@_store_operation("list medications")
def list_medications(db: Session, owner_id: str) -> List[Medication]:
    return db.execute(_newest_first(Medication, owner_id)).scalars().all()


# ---------- moods ----------
def _mood_upsert_statement(dialect_name: str, owner_id: str, body: MoodUpsert):
    values = {"owner_id": owner_id, "date": body.date, "mood": body.mood}

    if dialect_name == "mysql":
        stmt = mysql.insert(Mood).values(**values)
        return stmt.on_duplicate_key_update(mood=stmt.inserted.mood)

    if dialect_name in ("sqlite", "postgresql"):
        dialect = sqlite if dialect_name == "sqlite" else postgresql
        stmt = dialect.insert(Mood).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[Mood.owner_id, Mood.date],
            set_={"mood": stmt.excluded.mood},
        )

    raise NotImplementedError(f"mood upsert is not supported on '{dialect_name}'")


@_store_operation("upsert mood")
def upsert_mood(db: Session, owner_id: str, body: MoodUpsert) -> Mood:
    """
    Insert the day's mood, or replace it if the (owner_id, date) row exists.
    A single conditional INSERT so two concurrent writes never produce two rows.
    """
    stmt = _mood_upsert_statement(db.get_bind().dialect.name, owner_id, body)
    db.execute(stmt)
    db.commit()

    row = db.execute(
        select(Mood).where(Mood.owner_id == owner_id, Mood.date == body.date)
    ).scalar_one()
    # the session may hold a stale copy from an earlier read
    db.refresh(row)
    logger.info(
        "[tracker_store] mood upserted uid=%s date=%s mood=%s",
        mask_uid(owner_id), row.date, row.mood,
    )
    return row


@_store_operation("list moods")
def list_moods(db: Session, owner_id: str) -> List[Mood]:
    return db.execute(_newest_first(Mood, owner_id)).scalars().all()


# ---------- all records (analysis / export) ----------
@_store_operation("fetch tracker records")
def fetch_tracker_records(db: Session, owner_id: str) -> TrackerRecords:
    records = TrackerRecords(
        symptoms=db.execute(_oldest_first(Symptom, owner_id)).scalars().all(),
        meals=db.execute(_oldest_first(Meal, owner_id)).scalars().all(),
        medications=db.execute(_oldest_first(Medication, owner_id)).scalars().all(),
        moods=db.execute(_oldest_first(Mood, owner_id)).scalars().all(),
    )
    logger.info(
        "[tracker_store] fetched uid=%s symptoms=%d meals=%d medications=%d moods=%d",
        mask_uid(owner_id),
        len(records.symptoms),
        len(records.meals),
        len(records.medications),
        len(records.moods),
    )
    return records
