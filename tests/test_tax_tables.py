import json

import pytest

from paystub.errors import TaxTableNotFound
from paystub.models import FilingStatus, PayFrequency
from paystub.tax_tables import RateTables, TaxTableRepository, default_tables


def test_available_versions_lists_bundled_tables():
    versions = TaxTableRepository().available_versions()

    assert "2023_v1" in versions
    assert versions == sorted(versions)


def test_periods_and_allowances_per_frequency():
    tables = default_tables()

    assert tables.periods_for(PayFrequency.WEEKLY) == 52
    assert tables.periods_for(PayFrequency.SEMIMONTHLY) == 24
    assert tables.periods_for(PayFrequency.SALARY) == 12
    assert tables.allowance_for(PayFrequency.BIWEEKLY) == 182.69
    assert tables.allowance_for(PayFrequency.SALARY) == tables.allowance_for(PayFrequency.MONTHLY) == 395.83


def test_federal_rates_by_filing_status():
    tables = default_tables()

    assert tables.federal_rate_for(FilingStatus.SINGLE, PayFrequency.WEEKLY) == 0.12
    assert tables.federal_rate_for(FilingStatus.MARRIED, PayFrequency.SALARY) == 0.10


def test_state_rates_cover_every_state_code():
    tables = default_tables()

    assert len(tables.state_rates) == 51
    assert tables.state_rate_for("GA") == 0.04
    assert tables.state_rate_for("tx") == 0
    assert tables.state_rate_for("XX") == 0


def test_tables_are_read_only():
    tables = default_tables()

    with pytest.raises(TypeError):
        tables.state_rates["GA"] = 0.5
    with pytest.raises(AttributeError):
        tables.medicare_rate = 0.5


def test_load_missing_table_version_raises(tmp_path):
    repo = TaxTableRepository(tmp_path)

    with pytest.raises(TaxTableNotFound):
        repo.load("missing")
    with pytest.raises(FileNotFoundError):
        repo.load("missing")


def test_load_custom_table_fills_defaults(tmp_path):
    (tmp_path / "custom.json").write_text(
        json.dumps({"version": "custom", "state": {"rates": {"GA": 0.05}}}), encoding="utf-8"
    )

    tables = TaxTableRepository(tmp_path).load("custom")

    assert isinstance(tables, RateTables)
    assert tables.state_rate_for("GA") == 0.05
    assert tables.federal_rate_for(FilingStatus.SINGLE, PayFrequency.WEEKLY) == 0.12
    assert tables.periods_for(PayFrequency.WEEKLY) == 26
    assert tables.social_security_wage_base == 160200
