"""Group dated records into `YYYY-MM` buckets."""

from __future__ import annotations

from typing import Callable, Iterable

from bizops_pipeline.errors import InvalidRecordError
from bizops_pipeline.models import MonetaryRecord
from bizops_pipeline.periods import period_key_of

RecordFilter = Callable[[MonetaryRecord], bool]


def bucket_by_period(
    records: Iterable[MonetaryRecord],
    period_filter: RecordFilter | None = None,
) -> dict[str, list[MonetaryRecord]]:
    """Partition records by the period of their date.

    The filter is applied before bucketing, so excluded records never create
    a bucket. Records keep their input order inside each bucket. Only periods
    that received at least one record appear in the result.

    Args:
        records: Records to bucket.
        period_filter: Optional predicate; records for which it returns
            False are skipped.

    Returns:
        Mapping of period key to the list of records dated in that period.

    Raises:
        InvalidRecordError: if a record's date cannot be read.
    """
    buckets: dict[str, list[MonetaryRecord]] = {}
    for rec in records:
        if period_filter is not None and not period_filter(rec):
            continue
        try:
            key = period_key_of(rec.date)
        except InvalidRecordError as exc:
            raise InvalidRecordError(
                f"Record {rec.id!r} has an invalid date: {exc}",
                record_id=rec.id,
            ) from exc
        buckets.setdefault(key, []).append(rec)
    return buckets
