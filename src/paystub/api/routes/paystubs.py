from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from paystub.api.dependencies import get_calculator, get_payment_provider, get_renderer, require_user
from paystub.api.schemas import CalculationOut, CheckoutIn, CheckoutOut, DownloadIn, PaystubIn
from paystub.calculator import PayrollCalculator
from paystub.checkout import PaymentProvider, checkout_metadata
from paystub.codec import dump_result
from paystub.config import Settings, get_settings
from paystub.errors import CheckoutError
from paystub.logging import get_logger
from paystub.models import PaystubData
from paystub.options import Margins, RenderOptions
from paystub.pipeline import prepare
from paystub.renderer import Renderer, RenderResult
from paystub.validation import validate_paystub

router = APIRouter(prefix="/paystubs", tags=["paystubs"])
logger = get_logger(__name__)


def _require_valid(data: PaystubData) -> None:
    errors = validate_paystub(data)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=errors)


def _options(settings: Settings, watermark: bool) -> RenderOptions:
    return RenderOptions(
        watermark=watermark, page_format=settings.page_format, margins=Margins.uniform(settings.margin)
    )


def _document_response(result: RenderResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Paystub-Kind": result.kind,
        },
    )


@router.post("/calculate", response_model=CalculationOut)
def calculate(payload: PaystubIn, calculator: PayrollCalculator = Depends(get_calculator)) -> CalculationOut:
    data = payload.to_domain()
    result = calculator.compute(data.earnings, data.tax, data.deductions, data.personal.state)
    return CalculationOut(result=dump_result(result), errors=validate_paystub(data))


@router.post("/preview")
def preview(
    payload: PaystubIn,
    user_id: str = Depends(require_user),
    calculator: PayrollCalculator = Depends(get_calculator),
    renderer: Renderer = Depends(get_renderer),
    settings: Settings = Depends(get_settings),
) -> Response:
    statement = prepare(payload.to_domain(), calculator)
    result = renderer.render(statement.tree, _options(settings, watermark=True))
    logger.info("preview_rendered", user_id=user_id, kind=result.kind)
    return _document_response(result)


@router.post("/checkout", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    user_id: str = Depends(require_user),
    calculator: PayrollCalculator = Depends(get_calculator),
    provider: PaymentProvider = Depends(get_payment_provider),
    settings: Settings = Depends(get_settings),
) -> CheckoutOut:
    data = payload.paystub.to_domain()
    _require_valid(data)
    statement = prepare(data, calculator)
    try:
        session = provider.create_checkout(settings.price_cents, checkout_metadata(user_id, data, statement.result))
    except CheckoutError as exc:
        logger.error("checkout_failed", user_id=user_id, error=str(exc))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    logger.info("checkout_created", user_id=user_id, session_id=session.session_id)
    return CheckoutOut(url=session.url, session_id=session.session_id)


@router.post("/download")
def download(
    payload: DownloadIn,
    user_id: str = Depends(require_user),
    calculator: PayrollCalculator = Depends(get_calculator),
    provider: PaymentProvider = Depends(get_payment_provider),
    renderer: Renderer = Depends(get_renderer),
    settings: Settings = Depends(get_settings),
) -> Response:
    if not provider.is_paid(payload.session_id):
        raise HTTPException(status_code=status.HTTP_402_PAYMENT_REQUIRED, detail="Payment not confirmed")
    data = payload.paystub.to_domain()
    _require_valid(data)
    statement = prepare(data, calculator)
    result = renderer.render(statement.tree, _options(settings, watermark=False))
    logger.info("download_rendered", user_id=user_id, session_id=payload.session_id, kind=result.kind)
    return _document_response(result)
