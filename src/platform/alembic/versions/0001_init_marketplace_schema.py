"""init_marketplace_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-06

Schema:
- product: farmer listings; available_quantity is only written through
  version-conditional updates
- orders: buyer orders with the unit price captured at reservation time
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create product and orders tables."""

    op.create_table(
        'product',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('unit', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('available_quantity', sa.Integer(), nullable=False),
        sa.Column('is_organic', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('harvest_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('available_quantity >= 0', name='ck_product_available_quantity'),
        sa.CheckConstraint('price >= 0', name='ck_product_price'),
    )
    op.create_index(op.f('ix_product_owner_id'), 'product', ['owner_id'])
    op.create_index(op.f('ix_product_status'), 'product', ['status'])
    op.create_index(op.f('ix_product_created_at'), 'product', ['created_at'])

    op.create_table(
        'orders',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('buyer_id', sa.Integer(), nullable=False),
        sa.Column('farmer_id', sa.Integer(), nullable=False),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(length=20), nullable=False, server_default='cash'),
        sa.Column('delivery_address', JSONB(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column('delivered_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('quantity >= 1', name='ck_orders_quantity'),
    )
    op.create_index(op.f('ix_orders_product_id'), 'orders', ['product_id'])
    op.create_index('ix_orders_farmer_id_created_at', 'orders', ['farmer_id', 'created_at'])
    op.create_index('ix_orders_buyer_id_created_at', 'orders', ['buyer_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_orders_buyer_id_created_at', table_name='orders')
    op.drop_index('ix_orders_farmer_id_created_at', table_name='orders')
    op.drop_index(op.f('ix_orders_product_id'), table_name='orders')
    op.drop_table('orders')
    op.drop_index(op.f('ix_product_created_at'), table_name='product')
    op.drop_index(op.f('ix_product_status'), table_name='product')
    op.drop_index(op.f('ix_product_owner_id'), table_name='product')
    op.drop_table('product')
