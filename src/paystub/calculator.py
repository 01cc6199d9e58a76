from __future__ import annotations

from typing import Any, Optional

from .amounts import to_amount, to_count
from .models import DeductionsInput, EarningsInput, FilingStatus, PayFrequency, PayrollResult, TaxInput
from .tax_tables import RateTables, TaxTableRepository, default_tables


def _frequency(value: Any) -> PayFrequency:
    try:
        return PayFrequency(value)
    except ValueError:
        return PayFrequency.BIWEEKLY


def _filing_status(value: Any) -> FilingStatus:
    try:
        return FilingStatus(value)
    except ValueError:
        return FilingStatus.SINGLE


class PayrollCalculator:
    def __init__(self, tables: Optional[RateTables] = None):
        self.tables = tables or default_tables()

    @classmethod
    def from_repository(cls, repo: TaxTableRepository, version: str) -> "PayrollCalculator":
        return cls(repo.load(version))

    def gross_pay(self, earnings: EarningsInput) -> float:
        frequency = _frequency(earnings.pay_frequency)
        annual_salary = to_amount(earnings.annual_salary)
        if frequency == PayFrequency.SALARY and annual_salary > 0:
            return annual_salary / self.tables.periods_for(frequency)
        regular = to_amount(earnings.hourly_rate) * to_amount(earnings.hours_worked)
        overtime = to_amount(earnings.overtime_rate) * to_amount(earnings.overtime_hours)
        return regular + overtime

    def federal_withholding(
        self, gross_pay: float, exemptions: int, frequency: PayFrequency, filing_status: FilingStatus
    ) -> float:
        taxable_wages = max(0.0, gross_pay - exemptions * self.tables.allowance_for(frequency))
        return taxable_wages * self.tables.federal_rate_for(filing_status, frequency)

    def state_withholding(self, gross_pay: float, state: str, exemptions: int) -> float:
        rate = self.tables.state_rate_for(state)
        if rate == 0:
            return 0.0
        # flat per-allowance reduction, independent of pay frequency
        taxable_wages = max(0.0, gross_pay - exemptions * self.tables.state_allowance)
        return taxable_wages * rate

    def social_security(self, gross_pay: float) -> float:
        # annual wage base applied to a single period
        return min(gross_pay, self.tables.social_security_wage_base) * self.tables.social_security_rate

    def medicare(self, gross_pay: float) -> float:
        return gross_pay * self.tables.medicare_rate

    def compute(
        self, earnings: EarningsInput, tax: TaxInput, deductions: DeductionsInput, state: str
    ) -> PayrollResult:
        passthrough = dict(
            ytd_federal_tax=to_amount(tax.ytd_federal_tax),
            ytd_state_tax=to_amount(tax.ytd_state_tax),
            ytd_social_security_tax=to_amount(tax.ytd_social_security_tax),
            ytd_medicare_tax=to_amount(tax.ytd_medicare_tax),
            ytd_health_insurance=to_amount(deductions.ytd_health_insurance),
            ytd_dental_insurance=to_amount(deductions.ytd_dental_insurance),
            ytd_retirement_401k=to_amount(deductions.ytd_retirement_401k),
            ytd_other_deductions=to_amount(deductions.ytd_other_deductions),
            year_to_date_gross=to_amount(earnings.ytd_gross),
            year_to_date_net=to_amount(earnings.ytd_net),
        )
        current_deductions = dict(
            health_insurance=to_amount(deductions.health_insurance),
            dental_insurance=to_amount(deductions.dental_insurance),
            retirement_401k=to_amount(deductions.retirement_401k),
            other_deductions=to_amount(deductions.other_deductions),
        )
        state_disability_tax = to_amount(tax.state_disability_tax)

        gross_pay = self.gross_pay(earnings)
        if gross_pay <= 0:
            return PayrollResult(
                state_disability_tax=state_disability_tax,
                **current_deductions,
                **passthrough,
            )

        frequency = _frequency(earnings.pay_frequency)
        exemptions = to_count(tax.exemptions)
        federal_tax = self.federal_withholding(
            gross_pay, exemptions, frequency, _filing_status(tax.filing_status)
        )
        state_tax = self.state_withholding(gross_pay, state, exemptions)
        social_security_tax = self.social_security(gross_pay)
        medicare_tax = self.medicare(gross_pay)

        total_taxes = federal_tax + state_tax + social_security_tax + medicare_tax + state_disability_tax
        net_pay = gross_pay - total_taxes - sum(current_deductions.values())

        periods_worked = to_count(tax.pay_periods_worked)
        if periods_worked > 0:
            passthrough.update(
                ytd_federal_tax=federal_tax * periods_worked,
                ytd_state_tax=state_tax * periods_worked,
                ytd_social_security_tax=social_security_tax * periods_worked,
                ytd_medicare_tax=medicare_tax * periods_worked,
            )

        return PayrollResult(
            gross_pay=gross_pay,
            federal_tax=federal_tax,
            state_tax=state_tax,
            social_security_tax=social_security_tax,
            medicare_tax=medicare_tax,
            state_disability_tax=state_disability_tax,
            net_pay=net_pay,
            **current_deductions,
            **passthrough,
        )


def compute(
    earnings: EarningsInput,
    tax: TaxInput,
    deductions: DeductionsInput,
    state: str,
    tables: Optional[RateTables] = None,
) -> PayrollResult:
    return PayrollCalculator(tables).compute(earnings, tax, deductions, state)
