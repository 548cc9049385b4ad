from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_current_identity
from storefront.api.v1.schemas import OrderCreate, OrderCreated, OrderList, OrderResponse
from storefront.services import orders
from storefront.services.orders import LineRequest

router = APIRouter()

@router.post("/orders", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    items = [LineRequest(it.product_id, it.quantity) for it in payload.items or []]
    order = orders.create_order(
        db,
        user_id=identity["id"],
        items=items,
        shipping_address=payload.shipping_address,
        payment_method=payload.payment_method,
    )
    return {"message": "Order created successfully", "order": order}

@router.get("/orders", response_model=OrderList)
def list_orders(identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    return {"orders": orders.list_orders(db, identity["id"])}

@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    return {"order": orders.get_order(db, identity["id"], order_id)}
