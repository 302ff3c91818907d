from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from sqlalchemy import JSON, DateTime, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class OrderModel(Base):
    __tablename__ = 'orders'
    __table_args__ = (
        Index('ix_orders_farmer_id_created_at', 'farmer_id', 'created_at'),
        Index('ix_orders_buyer_id_created_at', 'buyer_id', 'created_at'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    buyer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    farmer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # No FK: orders keep their product id after the listing is deleted
    product_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False, default='cash')
    delivery_address: Mapped[dict] = mapped_column(JSON, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
