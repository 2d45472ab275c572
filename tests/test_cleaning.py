from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
import dask.dataframe as dd

from bizops_pipeline.clean.load_clean import import_records, read_source
from bizops_pipeline.clean.transform import clean_records_ddf
from bizops_pipeline.clean.validate import validate_partition
from bizops_pipeline.errors import UnsupportedFormatError
from bizops_pipeline.models import Employee, FinancialTransaction
from bizops_pipeline.store import JsonFileBackend, RecordRepository

ROWS = [
    {
        "id": " 1 ",
        "date": "2023-01-15",
        "client_name": "  ABC   Inc  ",
        "amount": "500000",
        "cost": "300000",
        "expenses": "50000",
        "employee_id": "1",
        "category": " web ",
    },
    {
        "id": "2",
        "date": "2023-02-31",
        "client_name": "DEF",
        "amount": "300000",
        "cost": "150000",
        "expenses": "30000",
        "employee_id": "2",
        "category": "consulting",
    },
]


def test_cleaning_trims_labels_and_coerces_types() -> None:
    ddf = dd.from_pandas(pd.DataFrame(ROWS), npartitions=1)
    out = clean_records_ddf(ddf).compute()
    assert out.loc[0, "category"] == "web"
    assert out.loc[0, "client_name"] == "ABC Inc"
    assert out.loc[0, "amount"] == 500000
    assert pd.isna(out.loc[1, "date"])


def test_validation_rejects_unparseable_dates() -> None:
    ddf = dd.from_pandas(pd.DataFrame(ROWS), npartitions=1)
    good, bad = validate_partition(clean_records_ddf(ddf).compute(), FinancialTransaction)
    assert bad == 1
    assert [r.id for r in good] == ["1"]
    assert good[0].notes is None


def test_import_csv_into_repository(tmp_path: Path) -> None:
    src = tmp_path / "sales.csv"
    pd.DataFrame(ROWS).to_csv(src, index=False)
    repo = RecordRepository(JsonFileBackend(tmp_path / "store"), "erp_financial_transactions", FinancialTransaction)

    good, bad = import_records(read_source(src), repo)

    assert (good, bad) == (1, 1)
    (stored,) = repo.list()
    assert stored.client_name == "ABC Inc"
    assert stored.amount == 500000


def test_read_source_rejects_unknown_suffix(tmp_path: Path) -> None:
    src = tmp_path / "sales.xlsx"
    src.write_bytes(b"")
    with pytest.raises(UnsupportedFormatError):
        read_source(src)


def test_import_employees_json(tmp_path: Path) -> None:
    src = tmp_path / "employees.json"
    src.write_text(
        '[{"id": "1", "name": " 山田  太郎 ", "email": "yamada@example.com", "department": "営業部",'
        ' "employment_type": "正社員", "start_date": "2022-04-01", "salary": "350000"}]',
        encoding="utf-8",
    )
    repo = RecordRepository(JsonFileBackend(tmp_path / "store"), "erp_employees", Employee)

    assert import_records(read_source(src), repo) == (1, 0)
    (stored,) = repo.list()
    assert stored.name == "山田 太郎"
    assert stored.salary == 350000
