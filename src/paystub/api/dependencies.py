from __future__ import annotations

from functools import lru_cache
from typing import Dict, Optional, Protocol

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from paystub.calculator import PayrollCalculator
from paystub.checkout import PaymentProvider, UnconfiguredPaymentProvider
from paystub.config import Settings, get_settings
from paystub.renderer import Renderer
from paystub.tax_tables import default_tables

bearer = HTTPBearer(auto_error=False)


class IdentityProvider(Protocol):
    def identify(self, token: str) -> Optional[str]:
        ...


class StaticTokenIdentityProvider:
    def __init__(self, tokens: Dict[str, str]):
        self.tokens = dict(tokens)

    def identify(self, token: str) -> Optional[str]:
        return self.tokens.get(token)


def get_identity_provider(settings: Settings = Depends(get_settings)) -> IdentityProvider:
    return StaticTokenIdentityProvider(settings.api_tokens)


def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> str:
    user_id = identity.identify(credentials.credentials) if credentials else None
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


@lru_cache
def _calculator(version: str) -> PayrollCalculator:
    return PayrollCalculator(default_tables(version))


def get_calculator(settings: Settings = Depends(get_settings)) -> PayrollCalculator:
    return _calculator(settings.tax_table_version)


def get_renderer(settings: Settings = Depends(get_settings)) -> Renderer:
    return Renderer(settings=settings)


def get_payment_provider() -> PaymentProvider:
    return UnconfiguredPaymentProvider()
