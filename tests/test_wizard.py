import pytest

from paystub.models import PaystubData
from paystub.wizard import FieldChange, PreviewWizard


def test_start_with_blank_data_has_zero_figures():
    draft = PreviewWizard().start()

    assert draft.data == PaystubData()
    assert draft.result.gross_pay == 0
    assert draft.result.net_pay == 0


def test_apply_returns_new_draft_and_leaves_original(paystub):
    wizard = PreviewWizard()
    draft = wizard.start(paystub)

    updated = wizard.apply(draft, FieldChange("earnings", "hours_worked", 40))

    assert updated is not draft
    assert draft.data.earnings.hours_worked == 80
    assert updated.data.earnings.hours_worked == 40
    assert updated.result.gross_pay == pytest.approx(25 * 40 + 37.5 * 5)
    assert draft.result.gross_pay == pytest.approx(2187.50)


def test_state_edit_recomputes_withholding(paystub):
    wizard = PreviewWizard()
    draft = wizard.start(paystub)

    updated = wizard.apply(draft, FieldChange("personal", "state", "TX"))

    assert draft.result.state_tax > 0
    assert updated.result.state_tax == 0


def test_name_edit_keeps_figures(paystub):
    wizard = PreviewWizard()
    draft = wizard.start(paystub)

    updated = wizard.apply(draft, FieldChange("personal", "first_name", "Sam"))

    assert updated.data.personal.first_name == "Sam"
    assert updated.result is draft.result


def test_apply_all_folds_changes_in_order(paystub):
    wizard = PreviewWizard()
    changes = [
        FieldChange("deductions", "health_insurance", 100),
        FieldChange("deductions", "health_insurance", 150),
        FieldChange("tax", "state_disability_tax", 5),
    ]

    draft = wizard.apply_all(wizard.start(paystub), changes)

    assert draft.result.health_insurance == 150
    assert draft.result.state_disability_tax == 5


@pytest.mark.parametrize(
    "change",
    [FieldChange("payroll", "hours_worked", 1), FieldChange("earnings", "bonus", 1)],
)
def test_unknown_fields_are_rejected(paystub, change):
    wizard = PreviewWizard()

    with pytest.raises(ValueError):
        wizard.apply(wizard.start(paystub), change)
