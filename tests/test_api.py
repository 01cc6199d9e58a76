from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from paystub.api.dependencies import get_payment_provider, get_renderer
from paystub.api.main import app
from paystub.checkout import CheckoutSession
from paystub.codec import dump_data
from paystub.config import Settings, get_settings
from paystub.errors import CheckoutError
from paystub.renderer import Renderer

TOKEN = "token-1"
AUTH = {"Authorization": f"Bearer {TOKEN}"}
test_settings = Settings(api_tokens={TOKEN: "user-1"})


class StaticBackend:
    def render(self, tree, options):
        marker = b"watermark" if options.watermark else b"final"
        return b"%PDF-1.4 " + marker


class FailingBackend:
    def render(self, tree, options):
        raise RuntimeError("renderer unavailable")


class FakePaymentProvider:
    def __init__(self, paid=True, fail=False):
        self.paid = paid
        self.fail = fail
        self.checkouts = []

    def create_checkout(self, amount_cents, metadata):
        if self.fail:
            raise CheckoutError("provider down")
        self.checkouts.append((amount_cents, metadata))
        return CheckoutSession(url="https://pay.example/cs_1", session_id="cs_1")

    def is_paid(self, session_id):
        return self.paid


@pytest.fixture
def provider():
    return FakePaymentProvider()


@pytest.fixture(autouse=True)
def overrides(provider):
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_renderer] = lambda: Renderer(backend=StaticBackend(), settings=test_settings)
    app.dependency_overrides[get_payment_provider] = lambda: provider
    yield
    app.dependency_overrides.clear()


def test_healthcheck():
    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "2023_v1" in response.json()["tax_table_versions"]


def test_calculate_returns_figures_and_errors(paystub):
    with TestClient(app) as client:
        complete = client.post("/paystubs/calculate", json=dump_data(paystub))
        blank = client.post("/paystubs/calculate", json={})

    assert complete.status_code == 200
    assert complete.json()["errors"] == []
    assert complete.json()["result"]["gross_pay"] == pytest.approx(2187.5)
    assert blank.status_code == 200
    assert blank.json()["result"]["net_pay"] == 0
    assert "First name is required" in blank.json()["errors"]


def test_calculate_rejects_malformed_payload():
    with TestClient(app) as client:
        response = client.post("/paystubs/calculate", json={"tax": {"exemptions": 99}})

    assert response.status_code == 422


def test_preview_requires_identity(paystub):
    with TestClient(app) as client:
        anonymous = client.post("/paystubs/preview", json=dump_data(paystub))
        unknown = client.post(
            "/paystubs/preview", json=dump_data(paystub), headers={"Authorization": "Bearer nope"}
        )

    assert anonymous.status_code == 401
    assert unknown.status_code == 401


def test_preview_is_watermarked(paystub):
    with TestClient(app) as client:
        response = client.post("/paystubs/preview", json=dump_data(paystub), headers=AUTH)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["x-paystub-kind"] == "pdf"
    assert 'filename="paystub.pdf"' in response.headers["content-disposition"]
    assert response.content == b"%PDF-1.4 watermark"


def test_preview_of_incomplete_form_uses_placeholders():
    app.dependency_overrides[get_renderer] = lambda: Renderer(backend=FailingBackend(), settings=test_settings)

    with TestClient(app) as client:
        response = client.post("/paystubs/preview", json={}, headers=AUTH)

    assert response.status_code == 200
    assert response.headers["x-paystub-kind"] == "html"
    assert response.headers["content-type"].startswith("text/html")
    assert 'filename="paystub.html"' in response.headers["content-disposition"]
    assert b"[Company Name]" in response.content
    assert b"PREVIEW" in response.content


def test_checkout_creates_session(paystub, provider):
    with TestClient(app) as client:
        response = client.post("/paystubs/checkout", json={"paystub": dump_data(paystub)}, headers=AUTH)

    assert response.status_code == 200
    assert response.json() == {"url": "https://pay.example/cs_1", "session_id": "cs_1"}
    ((amount, metadata),) = provider.checkouts
    assert amount == 499
    assert metadata["user_id"] == "user-1"
    assert len(metadata["paystub_data"].encode("utf-8")) <= 500


def test_checkout_rejects_invalid_statement(provider):
    with TestClient(app) as client:
        response = client.post("/paystubs/checkout", json={"paystub": {}}, headers=AUTH)

    assert response.status_code == 422
    assert "First name is required" in response.json()["detail"]
    assert provider.checkouts == []


def test_invalid_statement_status_is_not_deprecated(provider, recwarn):
    with TestClient(app) as client:
        response = client.post("/paystubs/checkout", json={"paystub": {}}, headers=AUTH)

    assert response.status_code == 422
    assert not [w for w in recwarn if "HTTP_422" in str(w.message)]


def test_checkout_provider_failure_is_bad_gateway(paystub, provider):
    provider.fail = True

    with TestClient(app) as client:
        response = client.post("/paystubs/checkout", json={"paystub": dump_data(paystub)}, headers=AUTH)

    assert response.status_code == 502


def test_download_requires_payment(paystub, provider):
    provider.paid = False

    with TestClient(app) as client:
        response = client.post(
            "/paystubs/download", json={"paystub": dump_data(paystub), "session_id": "cs_1"}, headers=AUTH
        )

    assert response.status_code == 402


def test_download_renders_without_watermark(paystub):
    with TestClient(app) as client:
        response = client.post(
            "/paystubs/download", json={"paystub": dump_data(paystub), "session_id": "cs_1"}, headers=AUTH
        )

    assert response.status_code == 200
    assert response.content == b"%PDF-1.4 final"
    assert response.headers["x-paystub-kind"] == "pdf"
