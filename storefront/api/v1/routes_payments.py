from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_current_identity, get_card_provider, get_wallet_provider
from storefront.api.v1.schemas import PaymentRead, PaymentResponse, PayPalPaymentPayload, StripePaymentPayload
from storefront.db.models import Payment
from storefront.services import payments
from storefront.services.providers import PaymentProvider

router = APIRouter()

def _payment_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(
        message="Payment processed successfully",
        payment=PaymentRead(
            id=payment.id,
            order_id=payment.order_id,
            transaction_id=payment.transaction_id,
            amount=payment.amount,
            method=payment.payment_method,
            status=payment.status,
        ),
    )

@router.post("/payments/stripe", response_model=PaymentResponse)
def pay_with_card(
    payload: StripePaymentPayload,
    identity: dict = Depends(get_current_identity),
    db: Session = Depends(get_db),
    provider: PaymentProvider = Depends(get_card_provider),
):
    payment = payments.process_card_payment(db, identity["id"], payload.order_id, payload.token, provider)
    return _payment_response(payment)

@router.post("/payments/paypal", response_model=PaymentResponse)
def pay_with_wallet(
    payload: PayPalPaymentPayload,
    identity: dict = Depends(get_current_identity),
    db: Session = Depends(get_db),
    provider: PaymentProvider = Depends(get_wallet_provider),
):
    payment = payments.process_wallet_payment(db, identity["id"], payload.order_id, payload.payment_id, provider)
    return _payment_response(payment)
