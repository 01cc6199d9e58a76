from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping

from .errors import TaxTableNotFound
from .models import FilingStatus, PayFrequency

TAX_DATA_DIR = Path(__file__).resolve().parent / "tax_data"
DEFAULT_VERSION = "2023_v1"


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RateTables:
    """Read-only constants used by the calculator.

    Salary pay reuses the monthly allowance and rate entries.
    """

    version: str
    periods_per_year: Mapping[str, int]
    federal_allowances: Mapping[str, float]
    federal_rates: Mapping[str, float]
    state_rates: Mapping[str, float]
    federal_default_rate: float = 0.12
    state_allowance: float = 50.0
    social_security_rate: float = 0.062
    social_security_wage_base: float = 160200.0
    medicare_rate: float = 0.0145

    @staticmethod
    def _table_frequency(frequency: PayFrequency) -> str:
        if frequency == PayFrequency.SALARY:
            return PayFrequency.MONTHLY.value
        return frequency.value

    def periods_for(self, frequency: PayFrequency) -> int:
        return int(self.periods_per_year.get(frequency.value, 26))

    def allowance_for(self, frequency: PayFrequency) -> float:
        return float(self.federal_allowances.get(self._table_frequency(frequency), 0.0))

    def federal_rate_for(self, filing_status: FilingStatus, frequency: PayFrequency) -> float:
        key = f"{filing_status.value}_{self._table_frequency(frequency)}"
        return float(self.federal_rates.get(key, self.federal_default_rate))

    def state_rate_for(self, state: str) -> float:
        return float(self.state_rates.get((state or "").strip().upper(), 0.0))

    @classmethod
    def from_dict(cls, data: dict) -> "RateTables":
        federal = data.get("federal", {})
        state = data.get("state", {})
        fica = data.get("fica", {})
        return cls(
            version=data["version"],
            periods_per_year=_frozen(data.get("periods_per_year", {})),
            federal_allowances=_frozen(federal.get("allowances", {})),
            federal_rates=_frozen(federal.get("rates", {})),
            state_rates=_frozen(state.get("rates", {})),
            federal_default_rate=float(federal.get("default_rate", 0.12)),
            state_allowance=float(state.get("allowance", 50)),
            social_security_rate=float(fica.get("social_security_rate", 0.062)),
            social_security_wage_base=float(fica.get("social_security_wage_base", 160200)),
            medicare_rate=float(fica.get("medicare_rate", 0.0145)),
        )


class TaxTableRepository:
    def __init__(self, base_path: Path = TAX_DATA_DIR):
        self.base_path = base_path

    def available_versions(self) -> List[str]:
        return sorted([p.stem for p in self.base_path.glob("*.json")])

    def load(self, version: str) -> RateTables:
        file_path = self.base_path / f"{version}.json"
        if not file_path.exists():
            raise TaxTableNotFound(f"Tax table version {version} not found at {file_path}")
        with file_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        return RateTables.from_dict(data)


@lru_cache
def default_tables(version: str = DEFAULT_VERSION) -> RateTables:
    return TaxTableRepository().load(version)
