from typing import Any

from fastapi import APIRouter, Depends

from paystub.config import Settings, get_settings
from paystub.tax_tables import TaxTableRepository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness check")
def healthcheck(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    versions = TaxTableRepository().available_versions()
    return {
        "status": "ok" if settings.tax_table_version in versions else "degraded",
        "tax_table_version": settings.tax_table_version,
        "tax_table_versions": versions,
    }
