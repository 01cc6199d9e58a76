"""Form validation rules applied before data reaches the calculator.

The calculator and composer never call into this module; the API layer and
the CLI do, and reject the request when errors come back.
"""
from __future__ import annotations

import math
import re
from datetime import date
from typing import List, Optional

from .models import US_STATES, DeductionsInput, EarningsInput, EmployerInfo, PayFrequency, PaystubData, PersonalInfo, TaxInput

ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
SSN_PATTERN = re.compile(r"^\d{4}$")
MAX_CURRENCY = 999999.99
MAX_HOURS = 200
MAX_EXEMPTIONS = 10
MAX_PAY_PERIODS = 52


def validate_state(state: str) -> bool:
    return (state or "").strip().upper() in US_STATES


def validate_zip_code(zip_code: str) -> bool:
    return bool(ZIP_PATTERN.match(zip_code or ""))


def validate_ssn(ssn: str) -> bool:
    return bool(SSN_PATTERN.match(ssn or ""))


def validate_currency(amount: float) -> bool:
    return isinstance(amount, (int, float)) and math.isfinite(amount) and 0 <= amount <= MAX_CURRENCY


def validate_hours(hours: float) -> bool:
    return isinstance(hours, (int, float)) and math.isfinite(hours) and 0 <= hours <= MAX_HOURS


def validate_pay_period(start: Optional[date], end: Optional[date]) -> bool:
    if start is None or end is None:
        return False
    return start < end


def personal_errors(personal: PersonalInfo) -> List[str]:
    errors: List[str] = []
    if not personal.first_name.strip():
        errors.append("First name is required")
    if not personal.last_name.strip():
        errors.append("Last name is required")
    if not personal.address.strip():
        errors.append("Address is required")
    if not personal.city.strip():
        errors.append("City is required")
    if not personal.state.strip():
        errors.append("State is required")
    elif not validate_state(personal.state):
        errors.append("Invalid state code")
    if not personal.zip_code.strip():
        errors.append("ZIP code is required")
    elif not validate_zip_code(personal.zip_code):
        errors.append("Invalid ZIP code format")
    if personal.ssn and not validate_ssn(personal.ssn):
        errors.append("SSN must be 4 digits")
    return errors


def employer_errors(employer: EmployerInfo) -> List[str]:
    errors: List[str] = []
    if not employer.company_name.strip():
        errors.append("Company name is required")
    if not employer.company_address.strip():
        errors.append("Company address is required")
    if not employer.company_city.strip():
        errors.append("Company city is required")
    if not employer.company_state.strip():
        errors.append("Company state is required")
    elif not validate_state(employer.company_state):
        errors.append("Invalid company state code")
    if not employer.company_zip_code.strip():
        errors.append("Company ZIP code is required")
    elif not validate_zip_code(employer.company_zip_code):
        errors.append("Invalid company ZIP code format")
    return errors


def earnings_errors(earnings: EarningsInput) -> List[str]:
    errors: List[str] = []
    if earnings.pay_period_start is None:
        errors.append("Pay period start date is required")
    if earnings.pay_period_end is None:
        errors.append("Pay period end date is required")
    if earnings.pay_date is None:
        errors.append("Pay date is required")
    if (
        earnings.pay_period_start is not None
        and earnings.pay_period_end is not None
        and not validate_pay_period(earnings.pay_period_start, earnings.pay_period_end)
    ):
        errors.append("Pay period end date must be after start date")

    if earnings.pay_frequency == PayFrequency.SALARY:
        if not validate_currency(earnings.annual_salary) or earnings.annual_salary <= 0:
            errors.append("Valid annual salary is required for salary pay frequency")
    else:
        if not validate_currency(earnings.hourly_rate) or earnings.hourly_rate <= 0:
            errors.append("Valid hourly rate is required")
        if not validate_hours(earnings.hours_worked) or earnings.hours_worked <= 0:
            errors.append("Valid hours worked is required")
    if not validate_hours(earnings.overtime_hours):
        errors.append("Overtime hours must be between 0 and 200")
    elif earnings.overtime_hours > 0 and (
        not validate_currency(earnings.overtime_rate) or earnings.overtime_rate <= 0
    ):
        errors.append("Overtime rate is required when overtime hours are specified")
    return errors


def tax_errors(tax: TaxInput) -> List[str]:
    errors: List[str] = []
    if not 0 <= tax.exemptions <= MAX_EXEMPTIONS:
        errors.append(f"Exemptions must be between 0 and {MAX_EXEMPTIONS}")
    if not 0 <= tax.pay_periods_worked <= MAX_PAY_PERIODS:
        errors.append(f"Pay periods worked must be between 0 and {MAX_PAY_PERIODS}")
    amounts = {
        "State disability tax": tax.state_disability_tax,
        "YTD federal tax": tax.ytd_federal_tax,
        "YTD state tax": tax.ytd_state_tax,
        "YTD Social Security tax": tax.ytd_social_security_tax,
        "YTD Medicare tax": tax.ytd_medicare_tax,
    }
    errors.extend(f"{label} must be a valid amount" for label, value in amounts.items() if not validate_currency(value))
    return errors


def deductions_errors(deductions: DeductionsInput) -> List[str]:
    labels = {
        "health_insurance": "Health insurance",
        "dental_insurance": "Dental insurance",
        "retirement_401k": "401(k)",
        "other_deductions": "Other deductions",
    }
    errors: List[str] = []
    for name, label in labels.items():
        if not validate_currency(getattr(deductions, name)):
            errors.append(f"{label} must be a valid amount")
        if not validate_currency(getattr(deductions, f"ytd_{name}")):
            errors.append(f"YTD {label} must be a valid amount")
    return errors


def validate_paystub(data: PaystubData) -> List[str]:
    return (
        personal_errors(data.personal)
        + employer_errors(data.employer)
        + earnings_errors(data.earnings)
        + tax_errors(data.tax)
        + deductions_errors(data.deductions)
    )
