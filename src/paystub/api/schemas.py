from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paystub.codec import load_data
from paystub.models import FilingStatus, PayFrequency, PaystubData


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PersonalInfoIn(_Section):
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    ssn: str = Field(default="", max_length=4)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, value: str) -> str:
        return value.strip().upper()


class EmployerInfoIn(_Section):
    company_name: str = ""
    company_address: str = ""
    company_city: str = ""
    company_state: str = ""
    company_zip_code: str = ""
    employee_id: str = ""

    @field_validator("company_state")
    @classmethod
    def normalize_state(cls, value: str) -> str:
        return value.strip().upper()


class EarningsIn(_Section):
    pay_period_start: Optional[date] = None
    pay_period_end: Optional[date] = None
    pay_date: Optional[date] = None
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    hourly_rate: float = Field(default=0, ge=0)
    hours_worked: float = Field(default=0, ge=0)
    overtime_rate: float = Field(default=0, ge=0)
    overtime_hours: float = Field(default=0, ge=0)
    annual_salary: float = Field(default=0, ge=0)
    ytd_gross: float = Field(default=0, ge=0)
    ytd_net: float = 0


class TaxIn(_Section):
    exemptions: int = Field(default=0, ge=0, le=10)
    filing_status: FilingStatus = FilingStatus.SINGLE
    state_disability_tax: float = Field(default=0, ge=0)
    pay_periods_worked: int = Field(default=0, ge=0, le=52)
    ytd_federal_tax: float = Field(default=0, ge=0)
    ytd_state_tax: float = Field(default=0, ge=0)
    ytd_social_security_tax: float = Field(default=0, ge=0)
    ytd_medicare_tax: float = Field(default=0, ge=0)


class DeductionsIn(_Section):
    health_insurance: float = Field(default=0, ge=0)
    dental_insurance: float = Field(default=0, ge=0)
    retirement_401k: float = Field(default=0, ge=0)
    other_deductions: float = Field(default=0, ge=0)
    ytd_health_insurance: float = Field(default=0, ge=0)
    ytd_dental_insurance: float = Field(default=0, ge=0)
    ytd_retirement_401k: float = Field(default=0, ge=0)
    ytd_other_deductions: float = Field(default=0, ge=0)


class PaystubIn(_Section):
    personal: PersonalInfoIn = Field(default_factory=PersonalInfoIn)
    employer: EmployerInfoIn = Field(default_factory=EmployerInfoIn)
    earnings: EarningsIn = Field(default_factory=EarningsIn)
    tax: TaxIn = Field(default_factory=TaxIn)
    deductions: DeductionsIn = Field(default_factory=DeductionsIn)

    def to_domain(self) -> PaystubData:
        return load_data(self.model_dump(mode="json"))


class CalculationOut(BaseModel):
    result: Dict[str, float]
    errors: List[str] = []


class CheckoutIn(BaseModel):
    paystub: PaystubIn


class CheckoutOut(BaseModel):
    url: str
    session_id: str


class DownloadIn(BaseModel):
    paystub: PaystubIn
    session_id: str = Field(..., min_length=1)
