import pytest

from config import DEFAULT_SEED_CATALOG, _parse_catalog, _positive_days


def test_default_catalog_when_unset():
    assert _parse_catalog(None) == DEFAULT_SEED_CATALOG
    assert _parse_catalog("") == DEFAULT_SEED_CATALOG


def test_catalog_from_json():
    assert _parse_catalog('{"Dune": 4, "Emma": "1"}') == {"Dune": 4, "Emma": 1}


@pytest.mark.parametrize("raw", ["[1, 2]", '{"Dune": -1}', "not json"])
def test_invalid_catalog(raw):
    with pytest.raises(ValueError):
        _parse_catalog(raw)


def test_loan_days_default(monkeypatch):
    monkeypatch.delenv("LOAN_PERIOD_DAYS", raising=False)
    assert _positive_days("LOAN_PERIOD_DAYS", "28") == 28


@pytest.mark.parametrize("value", ["0", "-21"])
def test_loan_days_must_be_positive(monkeypatch, value):
    monkeypatch.setenv("LOAN_EXTENSION_DAYS", value)
    with pytest.raises(ValueError, match="LOAN_EXTENSION_DAYS must be a positive"):
        _positive_days("LOAN_EXTENSION_DAYS", "21")
