# src/routers/tracker.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.auth.dependencies import get_current_user_id
from src.config.settings import settings
from src.db.database import get_db
from src.schemas.schema_tracker import (
    AnalysisSummary,
    MealCreate,
    MealOut,
    MedicationCreate,
    MedicationOut,
    MoodOut,
    MoodUpsert,
    SymptomCreate,
    SymptomOut,
)
from src.services import tracker_store
from src.services.errors import ReportGenerationError, StoreUnavailable
from src.services.health_report import generate_health_report, iter_chunks
from src.services.tracker_analysis import analyze_tracker

router = APIRouter(prefix="/tracker", tags=["tracker"])


def _call_store(action: str, func, *args):
    """
    Store failure -> 503 (client may retry the request)
    Constraint violation on write -> 400
    """
    try:
        return func(*args)
    except StoreUnavailable:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, f"Failed to {action}")
    except IntegrityError:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Failed to {action}")


# ---------- symptoms ----------
@router.post("/symptoms", response_model=SymptomOut, status_code=201)
def log_symptom(
    body: SymptomCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("log symptom", tracker_store.create_symptom, db, user_id, body)


@router.get("/symptoms", response_model=List[SymptomOut])
def get_symptoms(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("fetch symptoms", tracker_store.list_symptoms, db, user_id)


# ---------- meals ----------
@router.post("/meals", response_model=MealOut, status_code=201)
def log_meal(
    body: MealCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("log meal", tracker_store.create_meal, db, user_id, body)


@router.get("/meals", response_model=List[MealOut])
def get_meals(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("fetch meals", tracker_store.list_meals, db, user_id)


# ---------- medications ----------
@router.post("/medications", response_model=MedicationOut, status_code=201)
def log_medication(
    body: MedicationCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("log medication", tracker_store.create_medication, db, user_id, body)


@router.get("/medications", response_model=List[MedicationOut])
def get_medications(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("fetch medications", tracker_store.list_medications, db, user_id)


# ---------- moods ----------
@router.post("/moods", response_model=MoodOut, status_code=201)
def log_mood(
    body: MoodUpsert,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    One mood per day: posting again for the same date replaces the mood.
    """
    return _call_store("log mood", tracker_store.upsert_mood, db, user_id, body)


@router.get("/moods", response_model=List[MoodOut])
def get_moods(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _call_store("fetch moods", tracker_store.list_moods, db, user_id)


# ---------- analysis ----------
@router.get("/analysis", response_model=AnalysisSummary)
def get_analysis(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    records = _call_store("analyze tracker data", tracker_store.fetch_tracker_records, db, user_id)
    return analyze_tracker(records.symptoms, records.meals, records.medications, records.moods)


# ---------- pdf export ----------
@router.get("/export-pdf", response_class=StreamingResponse)
def export_pdf(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Summary & Trends followed by every symptom, meal, medication and mood,
    downloaded as an attachment.
    """
    records = _call_store("generate PDF report", tracker_store.fetch_tracker_records, db, user_id)
    summary = analyze_tracker(records.symptoms, records.meals, records.medications, records.moods)

    try:
        pdf = generate_health_report(
            records.symptoms,
            records.meals,
            records.medications,
            records.moods,
            summary,
            title=settings.report_title,
        )
    except ReportGenerationError:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate PDF report")

    return StreamingResponse(
        iter_chunks(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{settings.report_filename}"'},
    )
