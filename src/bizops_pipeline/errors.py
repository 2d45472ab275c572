"""Exception types raised by the pipeline."""

from __future__ import annotations


class BizOpsError(Exception):
    """Base class for all pipeline errors."""


class InvalidRecordError(BizOpsError, ValueError):
    """A record could not be validated or placed into a period."""

    def __init__(self, message: str, record_id: str | None = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class InvalidPeriodError(BizOpsError, ValueError):
    """A period key is not of the form ``YYYY-MM``."""


class RecordNotFoundError(BizOpsError, KeyError):
    """No record with the requested id exists in the collection."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "record not found"


class InvalidReportRequestError(BizOpsError, ValueError):
    """A report was asked for with an empty or reversed range."""


class UnsupportedFormatError(BizOpsError, ValueError):
    """An import file has a suffix the reader does not handle."""
