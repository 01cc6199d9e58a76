from datetime import date

import pytest

from paystub.models import (
    DeductionsInput,
    EarningsInput,
    EmployerInfo,
    FilingStatus,
    PayFrequency,
    PaystubData,
    PersonalInfo,
    TaxInput,
)


def build_paystub() -> PaystubData:
    return PaystubData(
        personal=PersonalInfo(
            first_name="Jordan",
            last_name="Rivera",
            address="12 Peachtree St",
            city="Atlanta",
            state="GA",
            zip_code="30303",
            ssn="1234",
        ),
        employer=EmployerInfo(
            company_name="Acme Logistics",
            company_address="500 Market Ave",
            company_city="Atlanta",
            company_state="GA",
            company_zip_code="30308",
            employee_id="E-1001",
        ),
        earnings=EarningsInput(
            pay_period_start=date(2023, 6, 1),
            pay_period_end=date(2023, 6, 14),
            pay_date=date(2023, 6, 16),
            pay_frequency=PayFrequency.BIWEEKLY,
            hourly_rate=25,
            hours_worked=80,
            overtime_rate=37.5,
            overtime_hours=5,
        ),
        tax=TaxInput(exemptions=1, filing_status=FilingStatus.SINGLE),
        deductions=DeductionsInput(),
    )


@pytest.fixture
def paystub() -> PaystubData:
    return build_paystub()
