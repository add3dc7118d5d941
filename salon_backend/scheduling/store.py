"""
Storage boundary used by the scheduler.

Writes are guarded: the overlap test runs inside the same INSERT/UPDATE
statement that writes the row, so two concurrent bookings for the same
employee cannot both land. On backends with row locks the employee row is
also locked first, which serialises bookings per employee.
"""

from datetime import datetime

from sqlalchemy import insert, literal, select, update
from sqlalchemy.orm import Session, aliased

from salon_backend.models.appointment import Appointment
from salon_backend.models.employee import Employee
from salon_backend.scheduling.overlap import appointment_end, overlap_filter


def _overlap_exists(
    tenant_id: int,
    employee_id: int,
    start: datetime,
    end: datetime,
    exclude_id: int | None = None,
):
    other = aliased(Appointment)
    conditions = [
        other.tenant_id == tenant_id,
        other.employee_id == employee_id,
        overlap_filter(other, start, end),
    ]
    if exclude_id is not None:
        conditions.append(other.id != exclude_id)
    return select(other.id).where(*conditions).exists()


def lock_employee(db: Session, tenant_id: int, employee_id: int) -> Employee | None:
    return db.query(Employee).filter(
        Employee.id == employee_id,
        Employee.tenant_id == tenant_id,
    ).with_for_update().first()


def find_overlapping(
    db: Session,
    tenant_id: int,
    employee_id: int,
    start: datetime,
    end: datetime,
    exclude_id: int | None = None,
) -> Appointment | None:
    query = db.query(Appointment).filter(
        Appointment.tenant_id == tenant_id,
        Appointment.employee_id == employee_id,
        overlap_filter(Appointment, start, end),
    )
    if exclude_id is not None:
        query = query.filter(Appointment.id != exclude_id)
    return query.order_by(Appointment.start_time.asc()).first()


def insert_appointment(
    db: Session,
    tenant_id: int,
    employee_id: int,
    client_name: str | None,
    client_phone: str | None,
    start: datetime,
    duration_minutes: int,
    notes: str | None,
    price: float,
    created_at: datetime,
) -> Appointment | None:
    """Insert the appointment unless it overlaps; returns None on overlap."""
    end = appointment_end(start, duration_minutes)
    table = Appointment.__table__
    values = {
        'tenant_id': tenant_id,
        'employee_id': employee_id,
        'client_name': client_name,
        'client_phone': client_phone,
        'start_time': start,
        'duration_minutes': duration_minutes,
        'end_time': end,
        'notes': notes,
        'price': price,
        'created_at': created_at,
    }
    source = select(
        *[literal(value, table.c[name].type).label(name) for name, value in values.items()]
    ).where(~_overlap_exists(tenant_id, employee_id, start, end))
    statement = insert(table).from_select(list(values), source).returning(table.c.id)

    appointment_id = db.execute(statement).scalar_one_or_none()
    if appointment_id is None:
        db.rollback()
        return None

    db.commit()
    return db.get(Appointment, appointment_id)


def update_appointment(
    db: Session,
    appointment_id: int,
    tenant_id: int,
    employee_id: int,
    start: datetime,
    duration_minutes: int,
    **changes,
) -> bool:
    """Move an appointment to a new window unless that window overlaps another booking."""
    end = appointment_end(start, duration_minutes)
    table = Appointment.__table__
    statement = update(table).where(
        table.c.id == appointment_id,
        table.c.tenant_id == tenant_id,
        ~_overlap_exists(tenant_id, employee_id, start, end, exclude_id=appointment_id),
    ).values(
        employee_id=employee_id,
        start_time=start,
        duration_minutes=duration_minutes,
        end_time=end,
        **changes,
    )

    result = db.execute(statement)
    if result.rowcount == 0:
        db.rollback()
        return False

    db.commit()
    return True
