import json
from datetime import date

from paystub.codec import dump_data, dump_result, from_json, load_data, load_result, to_json
from paystub.models import FilingStatus, PayFrequency, PaystubData, PayrollResult


def test_json_round_trip_preserves_record(paystub):
    assert from_json(to_json(paystub)) == paystub


def test_dump_uses_plain_json_values(paystub):
    payload = dump_data(paystub)

    assert payload["earnings"]["pay_date"] == "2023-06-16"
    assert payload["earnings"]["pay_frequency"] == "biweekly"
    assert payload["tax"]["filing_status"] == "single"
    json.dumps(payload)


def test_load_tolerates_missing_and_bad_values():
    data = load_data(
        {
            "personal": {"first_name": "  Ana ", "state": None},
            "earnings": {
                "hourly_rate": "not a number",
                "hours_worked": "40",
                "pay_date": "06/16/2023",
                "pay_period_start": "2023-06-01T00:00:00Z",
                "pay_frequency": "hourly",
                "overtime_hours": float("inf"),
            },
            "tax": {"filing_status": "married", "exemptions": "2"},
            "unexpected": {"ignored": True},
        }
    )

    assert data.personal.first_name == "Ana"
    assert data.personal.state == ""
    assert data.earnings.hourly_rate == 0
    assert data.earnings.hours_worked == 40
    assert data.earnings.pay_date is None
    assert data.earnings.pay_period_start == date(2023, 6, 1)
    assert data.earnings.pay_frequency == PayFrequency.BIWEEKLY
    assert data.earnings.overtime_hours == 0
    assert data.tax.filing_status == FilingStatus.MARRIED
    assert data.tax.exemptions == 2


def test_load_empty_payload_gives_defaults():
    assert load_data(None) == PaystubData()
    assert load_data({}) == PaystubData()


def test_result_round_trip():
    result = PayrollResult(gross_pay=100.0, net_pay=80.0, ytd_medicare_tax=12.5)

    assert load_result(dump_result(result)) == result
