from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Protocol

from .errors import CheckoutError
from .models import PaystubData, PayrollResult

METADATA_LIMIT = 500


@dataclass(frozen=True)
class CheckoutSession:
    url: str
    session_id: str


class PaymentProvider(Protocol):
    def create_checkout(self, amount_cents: int, metadata: Dict[str, str]) -> CheckoutSession:
        ...

    def is_paid(self, session_id: str) -> bool:
        ...


class UnconfiguredPaymentProvider:
    def create_checkout(self, amount_cents: int, metadata: Dict[str, str]) -> CheckoutSession:
        raise CheckoutError("No payment provider configured")

    def is_paid(self, session_id: str) -> bool:
        return False


def truncate_utf8(text: str, limit: int = METADATA_LIMIT) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    return encoded[:limit].decode("utf-8", errors="ignore")


def checkout_summary(data: PaystubData, result: PayrollResult, limit: int = METADATA_LIMIT) -> str:
    """Short description of a statement for payment metadata.

    Providers cap metadata size, so this never embeds the full record.
    """
    summary = {
        "employee": data.personal.name,
        "company": data.employer.company_name,
        "pay_date": data.earnings.pay_date.isoformat() if data.earnings.pay_date else "",
        "frequency": getattr(data.earnings.pay_frequency, "value", data.earnings.pay_frequency),
        "gross_pay": round(result.gross_pay, 2),
        "net_pay": round(result.net_pay, 2),
    }
    return truncate_utf8(json.dumps(summary, separators=(",", ":")), limit)


def checkout_metadata(user_id: str, data: PaystubData, result: PayrollResult) -> Dict[str, str]:
    return {"user_id": user_id, "paystub_data": checkout_summary(data, result)}
