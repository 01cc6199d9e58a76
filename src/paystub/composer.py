from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List, Optional, Tuple

from .amounts import to_amount
from .document import (
    CompanyBlock,
    DeductionsBlock,
    DocumentTree,
    EarningsRow,
    EarningsTable,
    EmployeeBlock,
    Header,
    LineItem,
    NetPayLine,
    PayPeriodBlock,
    YTDBlock,
)
from .models import EarningsInput, EmployerInfo, PayFrequency, PayrollResult, PersonalInfo

TITLE = "PAYROLL STATEMENT"
CENT = Decimal("0.01")


def format_currency(value: Any) -> str:
    """Render ``1234.5`` as ``$1,234.50`` and ``-3`` as ``-$3.00``; halves round up.

    Anything that is not a finite number renders as ``$0.00``.
    """
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        number = 0.0
    if not math.isfinite(number):
        number = 0.0
    amount = Decimal(repr(number)).quantize(CENT, rounding=ROUND_HALF_UP)
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${abs(amount):,.2f}"


def format_date(value: Any) -> str:
    if not isinstance(value, date):
        return ""
    return value.strftime("%m/%d/%Y")


def format_hours(value: Any) -> str:
    return f"{to_amount(value):g}"


def _or(value: Any, placeholder: str) -> str:
    value = "" if value is None else str(value).strip()
    return value or placeholder


def _city_state_zip(city: str, state: str, zip_code: str) -> str:
    return f"{_or(city, '[City]')}, {_or(state, '[State]')} {_or(zip_code, '[ZIP]')}"


def _items(pairs: List[Tuple[str, float]]) -> Tuple[LineItem, ...]:
    return tuple(LineItem(label, format_currency(amount)) for label, amount in pairs if amount > 0)


def _company(employer: EmployerInfo) -> CompanyBlock:
    return CompanyBlock(
        name=_or(employer.company_name, "[Company Name]"),
        address=_or(employer.company_address, "[Company Address]"),
        city_state_zip=_city_state_zip(employer.company_city, employer.company_state, employer.company_zip_code),
    )


def _employee(personal: PersonalInfo, employer: EmployerInfo) -> EmployeeBlock:
    ssn = _or(personal.ssn, "")
    employee_id = _or(employer.employee_id, "")
    return EmployeeBlock(
        name=f"{_or(personal.first_name, '[First]')} {_or(personal.last_name, '[Last]')}",
        address=_or(personal.address, "[Address]"),
        city_state_zip=_city_state_zip(personal.city, personal.state, personal.zip_code),
        ssn=f"***-**-{ssn}" if ssn else None,
        employee_id=employee_id or None,
    )


def _earnings(result: PayrollResult, earnings: EarningsInput) -> EarningsTable:
    # clamped the same way the calculator clamps them
    hourly_rate = to_amount(earnings.hourly_rate)
    hours_worked = to_amount(earnings.hours_worked)
    overtime_rate = to_amount(earnings.overtime_rate)
    overtime_hours = to_amount(earnings.overtime_hours)

    if earnings.pay_frequency == PayFrequency.SALARY and to_amount(earnings.annual_salary) > 0:
        salary = format_currency(result.gross_pay)
        regular = EarningsRow("Regular Pay", salary, "", salary)
    else:
        regular = EarningsRow(
            "Regular Pay",
            format_currency(hourly_rate),
            format_hours(hours_worked),
            format_currency(hourly_rate * hours_worked),
        )
    rows = [regular]
    if overtime_hours > 0:
        rows.append(
            EarningsRow(
                "Overtime Pay",
                format_currency(overtime_rate),
                format_hours(overtime_hours),
                format_currency(overtime_rate * overtime_hours),
            )
        )
    return EarningsTable(rows=tuple(rows), gross_pay=format_currency(result.gross_pay))


def _deductions(result: PayrollResult) -> DeductionsBlock:
    return DeductionsBlock(
        taxes=_items(
            [
                ("Federal Tax", result.federal_tax),
                ("State Tax", result.state_tax),
                ("Social Security", result.social_security_tax),
                ("Medicare", result.medicare_tax),
                ("State Disability", result.state_disability_tax),
            ]
        ),
        other=_items(
            [
                ("Health Insurance", result.health_insurance),
                ("Dental Insurance", result.dental_insurance),
                ("401(k)", result.retirement_401k),
                ("Other", result.other_deductions),
            ]
        ),
    )


def _ytd(result: PayrollResult) -> Optional[YTDBlock]:
    if not (result.year_to_date_gross > 0 or result.year_to_date_net > 0):
        return None

    def running(pairs: List[Tuple[str, float, float]]) -> Tuple[LineItem, ...]:
        return tuple(
            LineItem(label, format_currency(previous + current))
            for label, previous, current in pairs
            if previous > 0 or current > 0
        )

    return YTDBlock(
        earnings=(
            LineItem("YTD Gross", format_currency(result.year_to_date_gross + result.gross_pay)),
            LineItem("YTD Net", format_currency(result.year_to_date_net + result.net_pay)),
        ),
        taxes=running(
            [
                ("YTD Federal", result.ytd_federal_tax, result.federal_tax),
                ("YTD State", result.ytd_state_tax, result.state_tax),
                ("YTD Social Security", result.ytd_social_security_tax, result.social_security_tax),
                ("YTD Medicare", result.ytd_medicare_tax, result.medicare_tax),
            ]
        ),
        deductions=running(
            [
                ("YTD Health Insurance", result.ytd_health_insurance, result.health_insurance),
                ("YTD Dental Insurance", result.ytd_dental_insurance, result.dental_insurance),
                ("YTD 401(k)", result.ytd_retirement_401k, result.retirement_401k),
                ("YTD Other", result.ytd_other_deductions, result.other_deductions),
            ]
        ),
    )


def compose(
    result: PayrollResult, personal: PersonalInfo, employer: EmployerInfo, earnings: EarningsInput
) -> DocumentTree:
    blocks = [
        Header(TITLE),
        _company(employer),
        _employee(personal, employer),
        PayPeriodBlock(
            period=f"{format_date(earnings.pay_period_start)} - {format_date(earnings.pay_period_end)}",
            pay_date=format_date(earnings.pay_date),
        ),
        _earnings(result, earnings),
        _deductions(result),
        NetPayLine(format_currency(result.net_pay)),
    ]
    ytd = _ytd(result)
    if ytd is not None:
        blocks.append(ytd)
    return DocumentTree(title=TITLE, blocks=tuple(blocks))
