# src/services/errors.py


class TrackerError(Exception):
    """Base class for tracker failures surfaced to the HTTP layer."""


class StoreUnavailable(TrackerError):
    """The record store failed a read or write. The whole request may be retried."""

    def __init__(self, operation: str):
        super().__init__(f"record store failed during '{operation}'")
        self.operation = operation


class ReportGenerationError(TrackerError):
    """Assembling the health report document failed."""
