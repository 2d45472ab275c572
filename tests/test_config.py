from __future__ import annotations

from pathlib import Path

import pytest

from bizops_pipeline.config import get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("BIZOPS_STORAGE", "BIZOPS_DATA_DIR", "BIZOPS_TRAILING_MONTHS", "BIZOPS_KNOWN_CATEGORIES", "MONGO_URI"):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.storage == "json"
    assert s.data_dir == Path("data/store")
    assert s.trailing_months == 12
    assert s.known_categories == frozenset()


def test_known_categories_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIZOPS_KNOWN_CATEGORIES", "IT, rent,,insurance ")
    assert get_settings().known_categories == {"IT", "rent", "insurance"}


@pytest.mark.parametrize(
    "env",
    [
        {"BIZOPS_STORAGE": "sqlite"},
        {"BIZOPS_STORAGE": "mongo", "MONGO_URI": ""},
        {"BIZOPS_TRAILING_MONTHS": "0"},
        {"BIZOPS_TRAILING_MONTHS": "twelve"},
    ],
)
def test_invalid_settings_raise(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    for k, v in env.items():
        monkeypatch.setenv(k, v)
    with pytest.raises(RuntimeError):
        get_settings()
