from dataclasses import replace

import pytest

from paystub.calculator import PayrollCalculator
from paystub.composer import TITLE, compose, format_currency, format_date, format_hours
from paystub.models import PayFrequency, PaystubData, PayrollResult
from paystub.pipeline import prepare
from paystub.wizard import FieldChange, PreviewWizard


@pytest.mark.parametrize(
    "value, expected",
    [
        (1234.5, "$1,234.50"),
        (135.625, "$135.63"),
        (0.005, "$0.01"),
        (-3, "-$3.00"),
        (None, "$0.00"),
        (1694.07905, "$1,694.08"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_date_and_hours(paystub):
    assert format_date(paystub.earnings.pay_date) == "06/16/2023"
    assert format_date(None) == ""
    assert format_hours(80.0) == "80"
    assert format_hours(7.5) == "7.5"


def test_blank_record_renders_placeholders():
    data = PaystubData()
    tree = prepare(data).tree

    company = tree.find("company")
    employee = tree.find("employee")
    assert tree.title == TITLE
    assert company.name == "[Company Name]"
    assert company.address == "[Company Address]"
    assert company.city_state_zip == "[City], [State] [ZIP]"
    assert employee.name == "[First] [Last]"
    assert employee.address == "[Address]"
    assert employee.ssn is None
    assert employee.employee_id is None
    assert tree.find("net_pay").amount == "$0.00"
    assert tree.find("ytd") is None


def test_block_order(paystub):
    tree = prepare(paystub).tree

    assert [block.kind for block in tree.blocks] == [
        "header",
        "company",
        "employee",
        "pay_period",
        "earnings",
        "deductions",
        "net_pay",
    ]


def test_employee_and_period_details(paystub):
    tree = prepare(paystub).tree

    employee = tree.find("employee")
    period = tree.find("pay_period")
    assert employee.name == "Jordan Rivera"
    assert employee.city_state_zip == "Atlanta, GA 30303"
    assert employee.ssn == "***-**-1234"
    assert employee.employee_id == "E-1001"
    assert period.period == "06/01/2023 - 06/14/2023"
    assert period.pay_date == "06/16/2023"


def test_earnings_rows_include_overtime(paystub):
    earnings = prepare(paystub).tree.find("earnings")

    regular, overtime = earnings.rows
    assert (regular.description, regular.rate, regular.hours, regular.amount) == (
        "Regular Pay",
        "$25.00",
        "80",
        "$2,000.00",
    )
    assert (overtime.description, overtime.rate, overtime.hours, overtime.amount) == (
        "Overtime Pay",
        "$37.50",
        "5",
        "$187.50",
    )
    assert earnings.gross_pay == "$2,187.50"


def test_no_overtime_row_without_overtime_hours(paystub):
    paystub.earnings = replace(paystub.earnings, overtime_hours=0)

    assert len(prepare(paystub).tree.find("earnings").rows) == 1


def test_salary_row_shows_period_amount(paystub):
    paystub.earnings = replace(paystub.earnings, pay_frequency=PayFrequency.SALARY, annual_salary=60000, overtime_hours=0)

    (row,) = prepare(paystub).tree.find("earnings").rows

    assert row.rate == "$5,000.00"
    assert row.hours == ""
    assert row.amount == "$5,000.00"


def test_deductions_list_only_nonzero_items(paystub):
    paystub.deductions = replace(paystub.deductions, health_insurance=120, retirement_401k=80)

    block = prepare(paystub).tree.find("deductions")

    assert [(item.label, item.amount) for item in block.taxes] == [
        ("Federal Tax", "$240.58"),
        ("State Tax", "$85.50"),
        ("Social Security", "$135.63"),
        ("Medicare", "$31.72"),
    ]
    assert [(item.label, item.amount) for item in block.other] == [
        ("Health Insurance", "$120.00"),
        ("401(k)", "$80.00"),
    ]


def test_net_pay_line(paystub):
    tree = prepare(paystub).tree

    assert tree.find("net_pay").amount == "$1,694.08"


def test_ytd_block_adds_current_period(paystub):
    paystub.earnings = replace(paystub.earnings, ytd_gross=10000, ytd_net=8000)
    paystub.tax = replace(paystub.tax, ytd_federal_tax=1000)
    result = PayrollCalculator().compute(paystub.earnings, paystub.tax, paystub.deductions, paystub.personal.state)

    ytd = compose(result, paystub.personal, paystub.employer, paystub.earnings).find("ytd")

    assert [(item.label, item.amount) for item in ytd.earnings] == [
        ("YTD Gross", "$12,187.50"),
        ("YTD Net", "$9,694.08"),
    ]
    assert ytd.taxes[0].label == "YTD Federal"
    assert ytd.taxes[0].amount == "$1,240.58"
    assert [item.label for item in ytd.taxes] == ["YTD Federal", "YTD State", "YTD Social Security", "YTD Medicare"]
    assert ytd.deductions == ()


def test_ytd_block_needs_previous_totals(paystub):
    result = PayrollResult(gross_pay=100, net_pay=90, ytd_federal_tax=50)

    tree = compose(result, paystub.personal, paystub.employer, paystub.earnings)

    assert tree.find("ytd") is None


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "abc", object()])
def test_format_currency_treats_non_numbers_as_zero(value):
    assert format_currency(value) == "$0.00"


def test_format_currency_accepts_numeric_strings():
    assert format_currency("12.5") == "$12.50"


@pytest.mark.parametrize("hourly_rate", [float("inf"), float("nan"), -25, "not a rate"])
def test_out_of_contract_rates_are_clamped_in_rows(paystub, hourly_rate):
    paystub.earnings = replace(paystub.earnings, hourly_rate=hourly_rate)

    earnings = prepare(paystub).tree.find("earnings")

    regular = earnings.rows[0]
    assert (regular.rate, regular.hours, regular.amount) == ("$0.00", "80", "$0.00")
    assert earnings.gross_pay == "$187.50"


def test_negative_overtime_hours_drop_the_overtime_row(paystub):
    paystub.earnings = replace(paystub.earnings, overtime_hours=-5)

    earnings = prepare(paystub).tree.find("earnings")

    assert [row.description for row in earnings.rows] == ["Regular Pay"]
    assert earnings.gross_pay == "$2,000.00"


def test_string_edits_from_the_wizard_compose(paystub):
    wizard = PreviewWizard()
    draft = wizard.apply_all(
        wizard.start(paystub),
        [
            FieldChange("earnings", "hourly_rate", "30"),
            FieldChange("earnings", "pay_date", "2023-06-16"),
            FieldChange("employer", "employee_id", 1001),
        ],
    )

    statement = prepare(draft.data)

    regular = statement.tree.find("earnings").rows[0]
    assert (regular.rate, regular.hours, regular.amount) == ("$30.00", "80", "$2,400.00")
    assert statement.tree.find("earnings").gross_pay == "$2,587.50"
    assert statement.result.gross_pay == draft.result.gross_pay
    assert statement.tree.find("pay_period").pay_date == ""
    assert statement.tree.find("employee").employee_id == "1001"
