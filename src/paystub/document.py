from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: str


@dataclass(frozen=True)
class Header:
    kind: ClassVar[str] = "header"
    title: str


@dataclass(frozen=True)
class CompanyBlock:
    kind: ClassVar[str] = "company"
    name: str
    address: str
    city_state_zip: str


@dataclass(frozen=True)
class EmployeeBlock:
    kind: ClassVar[str] = "employee"
    name: str
    address: str
    city_state_zip: str
    ssn: Optional[str] = None
    employee_id: Optional[str] = None


@dataclass(frozen=True)
class PayPeriodBlock:
    kind: ClassVar[str] = "pay_period"
    period: str
    pay_date: str


@dataclass(frozen=True)
class EarningsRow:
    description: str
    rate: str
    hours: str
    amount: str


@dataclass(frozen=True)
class EarningsTable:
    kind: ClassVar[str] = "earnings"
    rows: Tuple[EarningsRow, ...]
    gross_pay: str


@dataclass(frozen=True)
class DeductionsBlock:
    kind: ClassVar[str] = "deductions"
    taxes: Tuple[LineItem, ...]
    other: Tuple[LineItem, ...]


@dataclass(frozen=True)
class NetPayLine:
    kind: ClassVar[str] = "net_pay"
    amount: str


@dataclass(frozen=True)
class YTDBlock:
    kind: ClassVar[str] = "ytd"
    earnings: Tuple[LineItem, ...]
    taxes: Tuple[LineItem, ...] = ()
    deductions: Tuple[LineItem, ...] = ()


Block = Union[
    Header, CompanyBlock, EmployeeBlock, PayPeriodBlock, EarningsTable, DeductionsBlock, NetPayLine, YTDBlock
]


@dataclass(frozen=True)
class DocumentTree:
    """Ordered, fully formatted statement content.

    Every value is already a display string; serializers only lay it out.
    """

    title: str
    blocks: Tuple[Block, ...]

    def find(self, kind: str) -> Optional[Block]:
        return next((block for block in self.blocks if block.kind == kind), None)
