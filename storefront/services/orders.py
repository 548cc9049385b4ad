"""Order placement.

Unit prices are copied from the catalog onto each order line when the order
is placed. Later catalog price changes never touch existing orders, and the
order total is always the sum of those captured line prices.
"""
import logging
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.core.errors import InternalError, NotFoundError, ValidationError
from storefront.db.models import Order, OrderItem, OrderStatus, PaymentStatus, Product

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


class LineRequest(NamedTuple):
    product_id: Optional[int]
    quantity: Optional[int]


class PricedLine(NamedTuple):
    product_id: int
    quantity: int
    price: Decimal


def price_lines(db: Session, items: Iterable[LineRequest]) -> List[PricedLine]:
    """Resolve each requested line against the catalog, in request order."""
    priced = []
    for item in items:
        if item.product_id is None:
            raise ValidationError('Each order item needs a product_id')
        if item.quantity is None or item.quantity < 1:
            raise ValidationError(f'Quantity for product {item.product_id} must be a positive integer')
        product = db.get(Product, item.product_id)
        if product is None:
            raise ValidationError(f'Product with ID {item.product_id} not found')
        priced.append(PricedLine(product.id, item.quantity, Decimal(product.price)))
    return priced


def order_total(lines: Iterable[PricedLine]) -> Decimal:
    total = sum((line.price * line.quantity for line in lines), Decimal('0'))
    return total.quantize(CENTS)


def create_order(
    db: Session,
    user_id: int,
    items: Optional[List[LineRequest]],
    shipping_address: Optional[str] = None,
    payment_method: Optional[str] = None,
) -> Order:
    if not items:
        raise ValidationError('Order items are required')

    lines = price_lines(db, items)
    order = Order(
        user_id=user_id,
        total_amount=order_total(lines),
        status=OrderStatus.pending,
        payment_status=PaymentStatus.pending,
        shipping_address=shipping_address,
        payment_method=payment_method,
    )
    order.items = [OrderItem(product_id=line.product_id, quantity=line.quantity, price=line.price) for line in lines]
    db.add(order)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Order creation failed for user_id=%s', user_id)
        raise InternalError()
    logger.info('Created order id=%s user_id=%s total=%s', order.id, user_id, order.total_amount)
    return order


def list_orders(db: Session, user_id: int) -> List[Order]:
    stmt = (
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def get_order(db: Session, user_id: int, order_id: int) -> Order:
    # Someone else's order and a missing one look the same to the caller.
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.id == order_id, Order.user_id == user_id)
    )
    order = db.execute(stmt).scalars().first()
    if order is None:
        raise NotFoundError('Order not found')
    return order
