from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError
from storefront.db.models import Product


def list_products(db: Session) -> List[Product]:
    stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_product(db: Session, product_id: int) -> Product:
    obj = db.get(Product, product_id)
    if not obj:
        raise NotFoundError('Product not found')
    return obj
