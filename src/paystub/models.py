from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class PayFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"
    SALARY = "salary"


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"


US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA",
        "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY",
        "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX",
        "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    }
)


@dataclass
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    ssn: str = ""  # last four digits only

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class EmployerInfo:
    company_name: str = ""
    company_address: str = ""
    company_city: str = ""
    company_state: str = ""
    company_zip_code: str = ""
    employee_id: str = ""


@dataclass
class EarningsInput:
    pay_period_start: Optional[date] = None
    pay_period_end: Optional[date] = None
    pay_date: Optional[date] = None
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    hourly_rate: float = 0.0
    hours_worked: float = 0.0
    overtime_rate: float = 0.0
    overtime_hours: float = 0.0
    annual_salary: float = 0.0
    # totals carried from earlier periods this year
    ytd_gross: float = 0.0
    ytd_net: float = 0.0


@dataclass
class TaxInput:
    exemptions: int = 0
    filing_status: FilingStatus = FilingStatus.SINGLE
    state_disability_tax: float = 0.0
    pay_periods_worked: int = 0
    ytd_federal_tax: float = 0.0
    ytd_state_tax: float = 0.0
    ytd_social_security_tax: float = 0.0
    ytd_medicare_tax: float = 0.0


@dataclass
class DeductionsInput:
    health_insurance: float = 0.0
    dental_insurance: float = 0.0
    retirement_401k: float = 0.0
    other_deductions: float = 0.0
    ytd_health_insurance: float = 0.0
    ytd_dental_insurance: float = 0.0
    ytd_retirement_401k: float = 0.0
    ytd_other_deductions: float = 0.0

    def current_total(self) -> float:
        return self.health_insurance + self.dental_insurance + self.retirement_401k + self.other_deductions


@dataclass(frozen=True)
class PayrollResult:
    gross_pay: float = 0.0
    federal_tax: float = 0.0
    state_tax: float = 0.0
    social_security_tax: float = 0.0
    medicare_tax: float = 0.0
    state_disability_tax: float = 0.0
    health_insurance: float = 0.0
    dental_insurance: float = 0.0
    retirement_401k: float = 0.0
    other_deductions: float = 0.0
    net_pay: float = 0.0
    ytd_federal_tax: float = 0.0
    ytd_state_tax: float = 0.0
    ytd_social_security_tax: float = 0.0
    ytd_medicare_tax: float = 0.0
    ytd_health_insurance: float = 0.0
    ytd_dental_insurance: float = 0.0
    ytd_retirement_401k: float = 0.0
    ytd_other_deductions: float = 0.0
    year_to_date_gross: float = 0.0
    year_to_date_net: float = 0.0

    def total_taxes(self) -> float:
        return (
            self.federal_tax
            + self.state_tax
            + self.social_security_tax
            + self.medicare_tax
            + self.state_disability_tax
        )

    def total_deductions(self) -> float:
        return self.health_insurance + self.dental_insurance + self.retirement_401k + self.other_deductions


@dataclass
class PaystubData:
    """Everything the form collects for a single statement."""

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    employer: EmployerInfo = field(default_factory=EmployerInfo)
    earnings: EarningsInput = field(default_factory=EarningsInput)
    tax: TaxInput = field(default_factory=TaxInput)
    deductions: DeductionsInput = field(default_factory=DeductionsInput)
