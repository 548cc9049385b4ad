"""Payment capture for orders.

The order row is locked for the duration of the capture, and the status
change to ``paid`` is committed together with the ledger row, so an order is
paid at most once and its status never disagrees with the ledger.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import ConflictError, InternalError, NotFoundError, PaymentError, ValidationError
from storefront.db.models import LedgerStatus, Order, Payment, PaymentStatus
from storefront.services.providers import PaymentProvider, ProviderError

logger = logging.getLogger(__name__)


def _load_order_for_capture(db: Session, user_id: int, order_id: int) -> Order:
    stmt = (
        select(Order)
        .where(Order.id == order_id, Order.user_id == user_id)
        .with_for_update()
    )
    order = db.execute(stmt).scalars().first()
    if order is None:
        raise NotFoundError('Order not found')
    return order


def capture_order(db: Session, user_id: int, order_id: int, credential: str, provider: PaymentProvider) -> Payment:
    order = _load_order_for_capture(db, user_id, order_id)
    if order.payment_status == PaymentStatus.paid:
        db.rollback()
        raise ConflictError('Order is already paid')

    try:
        transaction_id = provider.capture(order.total_amount, credential, f'Payment for order #{order.id}')
    except ProviderError as exc:
        db.rollback()
        logger.warning('%s capture failed for order_id=%s: %s', provider.method, order.id, exc)
        raise PaymentError()

    order.payment_status = PaymentStatus.paid
    payment = Payment(
        order_id=order.id,
        amount=order.total_amount,
        payment_method=provider.method,
        transaction_id=transaction_id,
        status=LedgerStatus.completed,
    )
    db.add(payment)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        # money moved but nothing was recorded; needs manual reconciliation
        logger.exception(
            'Captured %s transaction %s for order_id=%s but failed to record it',
            provider.method, transaction_id, order.id,
        )
        raise InternalError()
    logger.info('Order id=%s paid via %s (transaction %s)', order.id, provider.method, transaction_id)
    return payment


def process_card_payment(db: Session, user_id: int, order_id: Optional[int], token: Optional[str], provider: PaymentProvider) -> Payment:
    if not order_id or not token:
        raise ValidationError('Order ID and payment token are required')
    return capture_order(db, user_id, order_id, token, provider)


def process_wallet_payment(db: Session, user_id: int, order_id: Optional[int], payment_id: Optional[str], provider: PaymentProvider) -> Payment:
    if not order_id or not payment_id:
        raise ValidationError('Order ID and payment ID are required')
    return capture_order(db, user_id, order_id, payment_id, provider)
