from __future__ import annotations

import json
import math
from dataclasses import asdict, fields
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from .models import (
    DeductionsInput,
    EarningsInput,
    EmployerInfo,
    FilingStatus,
    PayFrequency,
    PaystubData,
    PayrollResult,
    PersonalInfo,
    TaxInput,
)

T = TypeVar("T")


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce(type_name: str, value: Any, default: Any) -> Any:
    if type_name == "float":
        return _number(value)
    if type_name == "int":
        return int(_number(value))
    if type_name == "str":
        return "" if value is None else str(value).strip()
    if type_name == "Optional[date]":
        return _parse_date(value)
    if type_name == "PayFrequency":
        try:
            return PayFrequency(value)
        except ValueError:
            return default
    if type_name == "FilingStatus":
        try:
            return FilingStatus(value)
        except ValueError:
            return default
    return value


def _load_record(cls: Type[T], payload: Optional[Dict[str, Any]]) -> T:
    payload = payload or {}
    defaults = cls()
    values = {}
    for f in fields(cls):
        default = getattr(defaults, f.name)
        if f.name not in payload:
            values[f.name] = default
            continue
        values[f.name] = _coerce(str(f.type), payload[f.name], default)
    return cls(**values)


def _serializer(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Type {type(value)} not serializable")


def load_data(payload: Optional[Dict[str, Any]]) -> PaystubData:
    """Build a :class:`PaystubData` from decoded JSON.

    Unparseable or absent numbers become ``0``; bad dates become ``None``.
    """
    payload = payload or {}
    return PaystubData(
        personal=_load_record(PersonalInfo, payload.get("personal")),
        employer=_load_record(EmployerInfo, payload.get("employer")),
        earnings=_load_record(EarningsInput, payload.get("earnings")),
        tax=_load_record(TaxInput, payload.get("tax")),
        deductions=_load_record(DeductionsInput, payload.get("deductions")),
    )


def dump_data(data: PaystubData) -> Dict[str, Any]:
    return json.loads(json.dumps(asdict(data), default=_serializer))


def load_result(payload: Optional[Dict[str, Any]]) -> PayrollResult:
    return _load_record(PayrollResult, payload)


def dump_result(result: PayrollResult) -> Dict[str, Any]:
    return asdict(result)


def to_json(data: PaystubData, indent: Optional[int] = 2) -> str:
    return json.dumps(asdict(data), default=_serializer, indent=indent)


def from_json(text: str) -> PaystubData:
    return load_data(json.loads(text))
