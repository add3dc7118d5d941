"""Tenant (business account) model definitions."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from salon_backend.database import Base, utcnow


class Tenant(Base):
    """Represents an independent business account."""
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String)
    phone = Column(String)
    email = Column(String, unique=True, index=True)
    business_type = Column(String)
    subscription_active = Column(Boolean, default=True, nullable=False)
    qr_code = Column(Text)  # latest pairing QR, base64
    created_at = Column(DateTime, default=utcnow, nullable=False)
