"""Employee model definitions."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from salon_backend.database import Base, utcnow


class Employee(Base):
    """Represents a staff member of a tenant."""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String)
    second_last_name = Column(String)
    email = Column(String)
    phone = Column(String)
    hired_on = Column(Date)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
