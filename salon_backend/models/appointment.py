"""Appointment model definitions."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from salon_backend.database import Base, utcnow


class Appointment(Base):
    """Represents a booking for one employee of one tenant."""
    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_employee_range", "tenant_id", "employee_id", "start_time", "end_time"),
    )

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    client_name = Column(String)
    client_phone = Column(String)
    start_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    # start_time + duration_minutes, stored so overlap can be filtered in SQL
    end_time = Column(DateTime, nullable=False)
    notes = Column(String)
    price = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
