"""Order model definitions."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from salon_backend.database import Base, utcnow

DELIVERY_TYPES = ('PICKUP', 'DELIVERY')
PAYMENT_METHODS = ('CARD', 'CASH')


class Order(Base):
    """Represents a pickup or delivery order placed with a tenant."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    client_name = Column(String)
    client_phone = Column(String)
    description = Column(String)
    delivery_type = Column(String, nullable=False)
    pickup_time = Column(DateTime)
    address = Column(String)
    payment_method = Column(String)
    total = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
