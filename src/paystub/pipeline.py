from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .calculator import PayrollCalculator
from .composer import compose
from .document import DocumentTree
from .models import PaystubData, PayrollResult
from .options import RenderOptions
from .renderer import Renderer, RenderResult


@dataclass(frozen=True)
class Statement:
    result: PayrollResult
    tree: DocumentTree


def prepare(data: PaystubData, calculator: Optional[PayrollCalculator] = None) -> Statement:
    calculator = calculator or PayrollCalculator()
    result = calculator.compute(data.earnings, data.tax, data.deductions, data.personal.state)
    return Statement(result=result, tree=compose(result, data.personal, data.employer, data.earnings))


def generate(
    data: PaystubData,
    options: Optional[RenderOptions] = None,
    calculator: Optional[PayrollCalculator] = None,
    renderer: Optional[Renderer] = None,
) -> RenderResult:
    statement = prepare(data, calculator)
    return (renderer or Renderer()).render(statement.tree, options)
