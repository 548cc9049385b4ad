"""Payment provider adapters.

Every adapter offers ``capture(amount, credential, description)`` and returns
the provider's transaction id, raising :class:`ProviderError` when the
capture did not happen.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Protocol

import httpx

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    pass


class PaymentProvider(Protocol):
    method: str

    def capture(self, amount: Decimal, credential: str, description: str) -> str: ...


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class StripeCardProvider:
    """Charges a tokenized card through the Stripe charges API."""

    method = 'stripe'

    def __init__(
        self,
        secret_key: str,
        api_base: str = 'https://api.stripe.com',
        currency: str = 'usd',
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip('/')
        self.currency = currency
        self.timeout = timeout
        self.transport = transport

    def capture(self, amount: Decimal, credential: str, description: str) -> str:
        if not self.secret_key:
            raise ProviderError('Stripe secret key is not configured')
        data = {
            'amount': str(to_minor_units(amount)),
            'currency': self.currency,
            'source': credential,
            'description': description,
        }
        try:
            with httpx.Client(base_url=self.api_base, timeout=self.timeout, transport=self.transport) as client:
                resp = client.post('/v1/charges', data=data, auth=(self.secret_key, ''))
        except httpx.HTTPError as exc:
            raise ProviderError(f'Stripe unreachable: {exc}') from exc

        if resp.status_code >= 400:
            try:
                reason = resp.json()['error']['message']
            except (ValueError, LookupError, TypeError):
                reason = resp.text
            raise ProviderError(f'Stripe charge rejected ({resp.status_code}): {reason}')

        try:
            charge = resp.json()
        except ValueError as exc:
            raise ProviderError(f'Stripe returned an unreadable charge: {resp.text[:200]}') from exc
        if not isinstance(charge, dict):
            raise ProviderError(f'Stripe returned an unexpected charge: {charge!r}')
        if charge.get('status') == 'failed' or not charge.get('id'):
            raise ProviderError(f"Stripe charge not captured: {charge.get('failure_message') or charge}")
        return charge['id']


class PayPalWalletProvider:
    """Accepts a PayPal payment id captured client-side.

    No call is made to PayPal: the id supplied by the client is recorded as
    the transaction id as-is. It is not verified against the provider.
    """

    method = 'paypal'

    def capture(self, amount: Decimal, credential: str, description: str) -> str:
        logger.warning('Recording unverified PayPal payment %s for %s (%s)', credential, amount, description)
        return credential


def card_provider() -> StripeCardProvider:
    return StripeCardProvider(
        secret_key=settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        currency=settings.PAYMENT_CURRENCY,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    )


def wallet_provider() -> PayPalWalletProvider:
    return PayPalWalletProvider()
