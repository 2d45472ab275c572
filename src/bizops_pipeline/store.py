"""Record repositories and their storage backends.

Each collection (sales transactions, fixed costs, employees, contractors,
payments, KPI metrics) is persisted as a whole under one key: a JSON file
per collection by default, or a MongoDB collection. Every mutation rewrites the collection; the last
write wins. Documents are validated with the collection's Pydantic model on
every read so nothing malformed reaches the aggregation code.
"""
from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Generic, Iterable, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from bizops_pipeline.config import Settings
from bizops_pipeline.db import bulk_upsert, get_client, get_db
from bizops_pipeline.errors import InvalidRecordError, RecordNotFoundError
from bizops_pipeline.models import (
    Contractor,
    Employee,
    FinancialTransaction,
    FixedCost,
    KpiMetric,
    Payment,
)

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# collection name -> (storage key, model)
COLLECTIONS: dict[str, tuple[str, type[BaseModel]]] = {
    "sales": ("erp_financial_transactions", FinancialTransaction),
    "fixed_costs": ("erp_fixed_costs", FixedCost),
    "employees": ("erp_employees", Employee),
    "contractors": ("erp_contractors", Contractor),
    "employee_payments": ("erp_employee_payments", Payment),
    "contractor_payments": ("erp_contractor_payments", Payment),
    "kpi_metrics": ("erp_kpi_metrics", KpiMetric),
}


class StorageBackend(Protocol):
    def load(self, key: str) -> list[dict[str, Any]]: ...

    def save(self, key: str, docs: list[dict[str, Any]]) -> None: ...


# --------------------------------------------------
# Backends
# --------------------------------------------------
class JsonFileBackend:
    """Stores each collection as a JSON array in ``<data_dir>/<key>.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> list[dict[str, Any]]:
        path = self._path(key)
        if not path.exists():
            return []
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, list):
            raise InvalidRecordError(f"{path} does not hold a JSON array")
        return data

    def save(self, key: str, docs: list[dict[str, Any]]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(docs, fh, ensure_ascii=False, indent=2)
        os.replace(tmp, path)


class MongoBackend:
    """Stores each collection as a MongoDB collection keyed by ``id``."""

    def __init__(self, db: Any) -> None:
        self.db = db

    def load(self, key: str) -> list[dict[str, Any]]:
        return list(self.db[key].find({}, {"_id": False}))

    def save(self, key: str, docs: list[dict[str, Any]]) -> None:
        collection = self.db[key]
        ids = [d["id"] for d in docs]
        collection.delete_many({"id": {"$nin": ids}})
        if docs:
            bulk_upsert(collection, docs, "id")


def open_backend(settings: Settings) -> StorageBackend:
    """Return the storage backend selected by `settings.storage`."""
    if settings.storage == "mongo":
        client = get_client(settings.mongo_uri or "")
        return MongoBackend(get_db(client, settings.mongo_db))
    return JsonFileBackend(settings.data_dir)


# --------------------------------------------------
# Repository
# --------------------------------------------------
class RecordRepository(Generic[M]):
    """CRUD over one persisted collection of `model` instances.

    Args:
        backend: Where the collection is loaded from and saved to.
        key: Storage key of the collection.
        model: Pydantic model every document must validate against.
        known_categories: Optional category whitelist; unknown labels are
            logged as warnings.
    """

    def __init__(
        self,
        backend: StorageBackend,
        key: str,
        model: type[M],
        known_categories: Iterable[str] = (),
    ) -> None:
        self.backend = backend
        self.key = key
        self.model = model
        self.known_categories = frozenset(known_categories)

    def _validate(self, doc: dict[str, Any]) -> M:
        try:
            return self.model.model_validate(doc)
        except ValidationError as exc:
            raise InvalidRecordError(
                f"Invalid {self.model.__name__} in {self.key}: {exc}",
                record_id=doc.get("id") if isinstance(doc, dict) else None,
            ) from exc

    def _check_category(self, record: M) -> None:
        category = getattr(record, "category", None)
        if self.known_categories and category is not None and category not in self.known_categories:
            log.warning("Unknown category %r on %s %s", category, self.key, getattr(record, "id", "?"))

    def _save(self, records: list[M]) -> None:
        self.backend.save(self.key, [r.model_dump(mode="json") for r in records])

    def list(self) -> list[M]:
        return [self._validate(doc) for doc in self.backend.load(self.key)]

    def get(self, record_id: str) -> M:
        for rec in self.list():
            if rec.id == record_id:
                return rec
        raise RecordNotFoundError(f"{self.key}: no record with id {record_id!r}")

    def add(self, data: dict[str, Any]) -> M:
        """Validate `data`, assign a fresh id and append it to the collection."""
        record = self._validate({**data, "id": uuid.uuid4().hex})
        self._check_category(record)
        records = self.list()
        records.append(record)
        self._save(records)
        log.info("Added %s to %s", record.id, self.key)
        return record

    def update(self, record: M) -> M:
        """Replace the stored record carrying the same id."""
        record = self._validate(record.model_dump())
        self._check_category(record)
        records = self.list()
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                self._save(records)
                log.info("Updated %s in %s", record.id, self.key)
                return record
        raise RecordNotFoundError(f"{self.key}: no record with id {record.id!r}")

    def delete(self, record_id: str) -> None:
        records = self.list()
        kept = [r for r in records if r.id != record_id]
        if len(kept) == len(records):
            raise RecordNotFoundError(f"{self.key}: no record with id {record_id!r}")
        self._save(kept)
        log.info("Deleted %s from %s", record_id, self.key)

    def replace_all(self, records: Iterable[M]) -> int:
        """Overwrite the whole collection; returns the number of records saved."""
        records = [self._validate(r.model_dump()) for r in records]
        for r in records:
            self._check_category(r)
        self._save(records)
        log.info("Replaced %s with %d records", self.key, len(records))
        return len(records)

    def extend(self, records: Iterable[M]) -> int:
        """Append records, replacing any stored record with the same id."""
        incoming = {r.id: r for r in records}
        for r in incoming.values():
            self._check_category(r)
        merged = [r for r in self.list() if r.id not in incoming]
        merged.extend(incoming.values())
        self._save(merged)
        log.info("Loaded %d records into %s", len(incoming), self.key)
        return len(incoming)


def open_repositories(
    settings: Settings,
    backend: StorageBackend | None = None,
) -> dict[str, RecordRepository[Any]]:
    """Return one repository per known collection, sharing one backend."""
    backend = backend or open_backend(settings)
    return {
        name: RecordRepository(backend, key, model, settings.known_categories)
        for name, (key, model) in COLLECTIONS.items()
    }
