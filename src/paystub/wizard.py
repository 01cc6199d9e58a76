from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Optional

from .calculator import PayrollCalculator
from .models import PaystubData, PayrollResult

SECTIONS = ("personal", "employer", "earnings", "tax", "deductions")


@dataclass(frozen=True)
class FieldChange:
    section: str
    name: str
    value: Any


@dataclass(frozen=True)
class PaystubDraft:
    data: PaystubData
    result: PayrollResult


class PreviewWizard:
    """Folds form edits into a draft, re-deriving the payroll result each time.

    Drafts are never modified in place; every change yields a new draft.
    """

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self.calculator = calculator or PayrollCalculator()

    def _derive(self, data: PaystubData) -> PayrollResult:
        return self.calculator.compute(data.earnings, data.tax, data.deductions, data.personal.state)

    def start(self, data: Optional[PaystubData] = None) -> PaystubDraft:
        data = data or PaystubData()
        return PaystubDraft(data=data, result=self._derive(data))

    def apply(self, draft: PaystubDraft, change: FieldChange) -> PaystubDraft:
        if change.section not in SECTIONS:
            raise ValueError(f"Unknown section {change.section!r}")
        section = getattr(draft.data, change.section)
        if change.name not in {f.name for f in fields(section)}:
            raise ValueError(f"Unknown field {change.section}.{change.name}")

        updated_section = replace(section, **{change.name: change.value})
        data = replace(draft.data, **{change.section: updated_section})
        # personal/employer edits never move the figures except for the state code
        if change.section == "employer" or (change.section == "personal" and change.name != "state"):
            return PaystubDraft(data=data, result=draft.result)
        return PaystubDraft(data=data, result=self._derive(data))

    def apply_all(self, draft: PaystubDraft, changes: Iterable[FieldChange]) -> PaystubDraft:
        for change in changes:
            draft = self.apply(draft, change)
        return draft
