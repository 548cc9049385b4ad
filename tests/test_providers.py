from decimal import Decimal
from urllib.parse import parse_qs

import httpx
import pytest

from storefront.services.providers import (
    PayPalWalletProvider,
    ProviderError,
    StripeCardProvider,
    to_minor_units,
)


def stripe_with(handler, key="sk_test_123"):
    return StripeCardProvider(secret_key=key, transport=httpx.MockTransport(handler), timeout=2.0)


def test_charge_sent_in_cents():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"id": "ch_1", "status": "succeeded"})

    txn = stripe_with(handler).capture(Decimal("24.25"), "tok_visa", "Payment for order #1")
    assert txn == "ch_1"
    assert seen["url"] == "https://api.stripe.com/v1/charges"
    assert seen["auth"].startswith("Basic ")
    assert seen["form"]["amount"] == ["2425"]
    assert seen["form"]["currency"] == ["usd"]
    assert seen["form"]["source"] == ["tok_visa"]


def test_declined_charge_raises():
    def handler(request):
        return httpx.Response(402, json={"error": {"message": "Your card was declined."}})

    with pytest.raises(ProviderError, match="declined"):
        stripe_with(handler).capture(Decimal("5.00"), "tok_chargeDeclined", "x")


def test_failed_status_raises():
    def handler(request):
        return httpx.Response(200, json={"id": "ch_2", "status": "failed", "failure_message": "insufficient funds"})

    with pytest.raises(ProviderError, match="insufficient funds"):
        stripe_with(handler).capture(Decimal("5.00"), "tok", "x")


def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(ProviderError):
        stripe_with(handler).capture(Decimal("5.00"), "tok", "x")


def test_unconfigured_key_raises_without_calling_out():
    def handler(request):
        raise AssertionError("should not be called")

    with pytest.raises(ProviderError):
        stripe_with(handler, key="").capture(Decimal("5.00"), "tok", "x")


@pytest.mark.parametrize("amount, cents", [
    (Decimal("24.25"), 2425),
    (Decimal("0.01"), 1),
    (Decimal("19.999"), 2000),
    (Decimal("100"), 10000),
])
def test_to_minor_units(amount, cents):
    assert to_minor_units(amount) == cents


def test_wallet_stub_echoes_payment_id():
    assert PayPalWalletProvider().capture(Decimal("9.99"), "PAYID-XYZ", "x") == "PAYID-XYZ"


def test_non_json_charge_body_raises():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>", headers={"content-type": "text/html"})

    with pytest.raises(ProviderError, match="unreadable"):
        stripe_with(handler).capture(Decimal("5.00"), "tok", "x")


def test_non_object_charge_body_raises():
    def handler(request):
        return httpx.Response(200, json=["ch_3"])

    with pytest.raises(ProviderError, match="unexpected"):
        stripe_with(handler).capture(Decimal("5.00"), "tok", "x")


def test_rejection_with_odd_error_body_raises():
    def handler(request):
        return httpx.Response(402, json=["declined"])

    with pytest.raises(ProviderError, match="402"):
        stripe_with(handler).capture(Decimal("5.00"), "tok", "x")
