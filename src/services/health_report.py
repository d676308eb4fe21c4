# src/services/health_report.py
from __future__ import annotations

import io
import logging
from typing import Iterable, Iterator, List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from src.models.tracker import Severity
from src.schemas.schema_tracker import AnalysisSummary, coerce_day
from src.services.errors import ReportGenerationError

logger = logging.getLogger(__name__)

PAGE_MARGIN = 40
CHUNK_SIZE = 64 * 1024

Section = Tuple[str, List[str]]


def _day(value) -> str:
    return coerce_day(value).isoformat()


def _line(index: int, date, primary: str, secondary: str | None = None, notes: str | None = None) -> str:
    text = f"{index}. {_day(date)} - {primary}"
    if secondary:
        text += f" ({secondary})"
    if notes:
        text += f" - {notes}"
    return text


def _summary_lines(summary: AnalysisSummary) -> List[str]:
    symptoms = summary.symptom_summary
    most_common = ", ".join(f"{s.description} ({s.count})" for s in symptoms.most_common)
    moods = ", ".join(f"{mood}: {count}" for mood, count in summary.mood_summary.by_mood.items())
    return [
        f"Total Symptoms: {symptoms.total}",
        f"Most Common Symptoms: {most_common}",
        f"Medication Days: {summary.medication_summary.adherence_days}",
        f"Mood Breakdown: {moods}",
    ]


def build_report_sections(
    symptoms: Iterable,
    meals: Iterable,
    medications: Iterable,
    moods: Iterable,
    summary: AnalysisSummary,
) -> List[Section]:
    """
    Report body in reading order:
      1. Summary & Trends (from the precomputed summary)
      2. Symptoms / Meals / Medications / Mood Log, one numbered line per record
    """
    symptom_lines = [
        _line(
            i, s.date, s.description,
            s.severity.value if isinstance(s.severity, Severity) else s.severity,
            s.notes,
        )
        for i, s in enumerate(symptoms, start=1)
    ]
    meal_lines = [_line(i, m.date, m.meal, notes=m.notes) for i, m in enumerate(meals, start=1)]
    medication_lines = [
        _line(i, m.date, m.medication, m.dose, m.notes)
        for i, m in enumerate(medications, start=1)
    ]
    mood_lines = [_line(i, m.date, m.mood) for i, m in enumerate(moods, start=1)]

    return [
        ("Summary & Trends", _summary_lines(summary)),
        ("Symptoms", symptom_lines),
        ("Meals", meal_lines),
        ("Medications", medication_lines),
        ("Mood Log", mood_lines),
    ]


def render_report_pdf(title: str, sections: List[Section]) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle", parent=styles["Title"], fontSize=22, leading=26, alignment=TA_CENTER
    )
    heading_style = ParagraphStyle("ReportHeading", parent=styles["Heading2"], fontSize=16, leading=20)
    summary_style = ParagraphStyle("ReportSummary", parent=styles["Normal"], fontSize=12, leading=15)
    line_style = ParagraphStyle("ReportLine", parent=styles["Normal"], fontSize=11, leading=14)

    story = [Paragraph(escape(title), title_style), Spacer(1, 12)]
    for position, (heading, lines) in enumerate(sections):
        story.append(Paragraph(f"<u>{escape(heading)}</u>", heading_style))
        body_style = summary_style if position == 0 else line_style
        story.extend(Paragraph(escape(line), body_style) for line in lines)
        story.append(Spacer(1, 12))

    # platypus flows the story across as many pages as needed
    doc.build(story)
    return buffer.getvalue()


def generate_health_report(
    symptoms: Iterable,
    meals: Iterable,
    medications: Iterable,
    moods: Iterable,
    summary: AnalysisSummary,
    title: str = "Health Tracker Report",
) -> bytes:
    """
    Render the whole document before anything is sent, so a failure
    (e.g. a record with an unparseable date) never reaches the client
    as a truncated PDF.
    """
    try:
        sections = build_report_sections(symptoms, meals, medications, moods, summary)
        pdf = render_report_pdf(title, sections)
    except Exception as e:
        logger.exception("[health_report] generation failed")
        raise ReportGenerationError(str(e)) from e

    logger.info(
        "[health_report] generated bytes=%d lines=%d",
        len(pdf), sum(len(lines) for _, lines in sections),
    )
    return pdf


def iter_chunks(data: bytes, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]
