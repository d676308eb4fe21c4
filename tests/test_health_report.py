"""Tests for health report assembly."""
import datetime as dt
import io
from types import SimpleNamespace

import pytest
from pypdf import PdfReader

from src.services.errors import ReportGenerationError
from src.services.health_report import (
    build_report_sections,
    generate_health_report,
    iter_chunks,
)
from src.services.tracker_analysis import analyze_tracker


@pytest.fixture
def records():
    return {
        "symptoms": [
            SimpleNamespace(date=dt.date(2024, 1, 1), description="headache", severity="mild", notes=None),
            SimpleNamespace(date=dt.date(2024, 1, 2), description="headache", severity="severe", notes="after lunch"),
        ],
        "meals": [
            SimpleNamespace(date=dt.date(2024, 1, 1), meal="oatmeal", notes=None),
            SimpleNamespace(date=dt.date(2024, 1, 2), meal="pasta", notes="spicy"),
        ],
        "medications": [
            SimpleNamespace(date=dt.date(2024, 1, 1), medication="ibuprofen", dose="200mg", notes=None),
            SimpleNamespace(date=dt.date(2024, 1, 1), medication="ibuprofen", dose="200mg", notes="evening"),
        ],
        "moods": [
            SimpleNamespace(date=dt.date(2024, 1, 1), mood="tired"),
            SimpleNamespace(date=dt.date(2024, 1, 2), mood="happy"),
        ],
    }


def _summary(records):
    return analyze_tracker(records["symptoms"], records["meals"], records["medications"], records["moods"])


def _pdf_text(pdf: bytes) -> str:
    reader = PdfReader(io.BytesIO(pdf))
    return "\n".join(page.extract_text() for page in reader.pages)


class TestBuildReportSections:
    def test_sections_in_fixed_order(self, records):
        sections = build_report_sections(**records, summary=_summary(records))
        assert [heading for heading, _ in sections] == [
            "Summary & Trends",
            "Symptoms",
            "Meals",
            "Medications",
            "Mood Log",
        ]

    def test_summary_lines(self, records):
        sections = dict(build_report_sections(**records, summary=_summary(records)))
        assert sections["Summary & Trends"] == [
            "Total Symptoms: 2",
            "Most Common Symptoms: headache (2)",
            "Medication Days: 1",
            "Mood Breakdown: tired: 1, happy: 1",
        ]

    def test_listing_lines(self, records):
        sections = dict(build_report_sections(**records, summary=_summary(records)))

        assert sections["Symptoms"] == [
            "1. 2024-01-01 - headache (mild)",
            "2. 2024-01-02 - headache (severe) - after lunch",
        ]
        assert sections["Meals"] == [
            "1. 2024-01-01 - oatmeal",
            "2. 2024-01-02 - pasta - spicy",
        ]
        assert sections["Medications"] == [
            "1. 2024-01-01 - ibuprofen (200mg)",
            "2. 2024-01-01 - ibuprofen (200mg) - evening",
        ]
        assert sections["Mood Log"] == [
            "1. 2024-01-01 - tired",
            "2. 2024-01-02 - happy",
        ]

    def test_datetime_dates_render_as_day(self):
        rows = [SimpleNamespace(date=dt.datetime(2024, 5, 6, 23, 15), mood="calm")]
        sections = dict(build_report_sections([], [], [], rows, summary=analyze_tracker([], [], [], rows)))
        assert sections["Mood Log"] == ["1. 2024-05-06 - calm"]

    def test_no_records_gives_headers_without_lines(self):
        sections = build_report_sections([], [], [], [], summary=analyze_tracker([], [], [], []))
        assert len(sections) == 5
        assert all(lines == [] for _, lines in sections[1:])


class TestGenerateHealthReport:
    def test_pdf_contains_title_and_records(self, records):
        pdf = generate_health_report(**records, summary=_summary(records))

        assert pdf.startswith(b"%PDF")
        text = _pdf_text(pdf)
        assert "Health Tracker Report" in text
        assert "Summary & Trends" in text
        assert "headache (severe) - after lunch" in text
        assert "Mood Log" in text

    def test_empty_report_does_not_error(self):
        pdf = generate_health_report([], [], [], [], summary=analyze_tracker([], [], [], []))

        text = _pdf_text(pdf)
        for heading in ("Symptoms", "Meals", "Medications", "Mood Log"):
            assert heading in text

    def test_markup_characters_are_escaped(self):
        meals = [SimpleNamespace(date="2024-01-01", meal="fish & chips <large>", notes=None)]
        pdf = generate_health_report([], meals, [], [], summary=analyze_tracker([], meals, [], []))
        assert "fish & chips <large>" in _pdf_text(pdf)

    def test_long_listing_flows_onto_more_pages(self):
        meals = [
            SimpleNamespace(date=dt.date(2024, 1, 1) + dt.timedelta(days=i), meal=f"meal {i}", notes=None)
            for i in range(200)
        ]
        pdf = generate_health_report([], meals, [], [], summary=analyze_tracker([], meals, [], []))
        assert len(PdfReader(io.BytesIO(pdf)).pages) > 1

    def test_bad_date_is_a_generation_failure(self):
        moods = [SimpleNamespace(date="not-a-date", mood="happy")]
        with pytest.raises(ReportGenerationError):
            generate_health_report([], [], [], moods, summary=analyze_tracker([], [], [], []))


def test_iter_chunks_reassembles():
    data = bytes(range(256)) * 10
    chunks = list(iter_chunks(data, chunk_size=1000))
    assert [len(c) for c in chunks] == [1000, 1000, 560]
    assert b"".join(chunks) == data
