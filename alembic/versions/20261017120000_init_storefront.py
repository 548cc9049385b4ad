from alembic import op
import sqlalchemy as sa

revision = "20261017120000"
down_revision = None

USER_ROLE = ("customer", "admin", "employee")
ORDER_STATUS = ("pending", "confirmed", "shipped", "delivered", "cancelled")
ORDER_PAYMENT_STATUS = ("pending", "paid", "failed", "refunded")
PAYMENT_STATUS = ("pending", "completed", "failed", "refunded")

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(length=100), nullable=False, unique=True, index=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100)),
        sa.Column('phone', sa.String(length=20)),
        sa.Column('address', sa.Text()),
        sa.Column('role', sa.Enum(*USER_ROLE, name='user_role'), nullable=False, server_default='customer'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', sa.String(length=50)),
        sa.Column('stock_quantity', sa.Integer(), server_default='0'),
        sa.Column('image_url', sa.String(length=255)),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.Enum(*ORDER_STATUS, name='order_status'), nullable=False, server_default='pending'),
        sa.Column('payment_status', sa.Enum(*ORDER_PAYMENT_STATUS, name='order_payment_status'), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(length=50)),
        sa.Column('shipping_address', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
    )
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False, index=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('transaction_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.Enum(*PAYMENT_STATUS, name='payment_status'), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

def downgrade():
    op.drop_table('payments')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('products')
    op.drop_table('users')
    for name in ('payment_status', 'order_payment_status', 'order_status', 'user_role'):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
