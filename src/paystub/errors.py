from __future__ import annotations


class PaystubError(Exception):
    """Base class for errors raised inside the paystub package."""


class TaxTableNotFound(PaystubError, FileNotFoundError):
    pass


class RenderBackendError(PaystubError):
    """The PDF backend could not produce a document.

    Raised between the backend and the renderer only; ``render`` converts it
    into the HTML fallback.
    """


class RenderTimeout(RenderBackendError):
    def __init__(self, phase: str, seconds: float):
        super().__init__(f"{phase} did not finish within {seconds:g}s")
        self.phase = phase
        self.seconds = seconds


class CheckoutError(PaystubError):
    pass
