# src/models/__init__.py
from src.models.tracker import Severity, Symptom, Meal, Medication, Mood
