from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, PlainSerializer
from typing import Annotated, List, Optional
from storefront.db.models import OrderStatus, PaymentStatus, UserRole, LedgerStatus

# Money goes over the wire as a JSON number, e.g. 24.25
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]

class RegisterPayload(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class LoginPayload(BaseModel):
    username: Optional[str] = None  # username or email
    password: Optional[str] = None

class UserRead(BaseModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserRead

class ProfileResponse(BaseModel):
    user: UserRead

class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Amount
    category: Optional[str] = None
    stock_quantity: int = 0
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class ProductList(BaseModel):
    products: List[ProductRead] = []

class ProductResponse(BaseModel):
    product: ProductRead

class OrderItemIn(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None

class OrderCreate(BaseModel):
    items: Optional[List[OrderItemIn]] = None
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None

class OrderItemRead(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Amount
    class Config: from_attributes = True

class OrderRead(BaseModel):
    id: int
    user_id: int
    total_amount: Amount
    status: OrderStatus
    payment_status: PaymentStatus
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class OrderDetail(OrderRead):
    items: List[OrderItemRead] = []

class OrderCreated(BaseModel):
    message: str
    order: OrderRead

class OrderList(BaseModel):
    orders: List[OrderRead] = []

class OrderResponse(BaseModel):
    order: OrderDetail

class StripePaymentPayload(BaseModel):
    order_id: Optional[int] = None
    token: Optional[str] = None

class PayPalPaymentPayload(BaseModel):
    order_id: Optional[int] = None
    payment_id: Optional[str] = None

class PaymentRead(BaseModel):
    id: int
    order_id: int
    transaction_id: str
    amount: Amount
    method: str
    status: LedgerStatus

class PaymentResponse(BaseModel):
    message: str
    payment: PaymentRead

class ContactPayload(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None

class MessageResponse(BaseModel):
    message: str
