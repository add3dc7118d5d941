"""
Booking decisions for a single (tenant, employee) pair.

``check_and_create`` either writes the appointment or raises ``SlotConflict``
carrying the next free start instants found by ``find_alternatives``. Nothing
is written on a conflict.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_backend.models.appointment import Appointment
from salon_backend.scheduling import store
from salon_backend.scheduling.errors import InvalidInput, PastDateRejected, SlotConflict, StorageFailure
from salon_backend.scheduling.instants import to_utc_naive
from salon_backend.scheduling.overlap import appointment_end

logger = logging.getLogger(__name__)

SEARCH_STEP_MINUTES = 30
SEARCH_WINDOW_MINUTES = 4 * 60
MAX_ALTERNATIVES = 5
MAX_SEARCH_ATTEMPTS = 20

INVALID_EMPLOYEE_MESSAGE = 'Invalid employee id.'
PAST_DATE_MESSAGE = 'Cannot book an appointment in the past.'
CONFLICT_MESSAGE = 'The requested time is already booked.'
STORAGE_FAILURE_MESSAGE = 'Could not save the appointment.'


def parse_employee_id(value) -> int:
    if isinstance(value, bool):
        raise InvalidInput(INVALID_EMPLOYEE_MESSAGE)

    if isinstance(value, int):
        employee_id = value
    elif isinstance(value, str) and value.strip().isdigit():
        employee_id = int(value.strip())
    else:
        raise InvalidInput(INVALID_EMPLOYEE_MESSAGE)

    if employee_id <= 0:
        raise InvalidInput(INVALID_EMPLOYEE_MESSAGE)
    return employee_id


def parse_duration(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInput('Duration must be a positive number of minutes.')
    return value


def resolve_price(value) -> float:
    # Anything that is not a number books at no charge.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if value < 0:
        raise InvalidInput('Price cannot be negative.')
    return value


def find_alternatives(
    db: Session,
    tenant_id: int,
    employee_id: int,
    start: datetime,
    duration_minutes: int,
    exclude_id: int | None = None,
) -> list[datetime]:
    """Return up to five free start instants after ``start``, earliest first.

    Candidates are ``start + 30 * k`` minutes and never more than four hours past
    ``start``. Each candidate keeps the requested duration.
    """
    alternatives: list[datetime] = []
    searched_minutes = 0
    attempts = 0
    candidate_start = start

    while len(alternatives) < MAX_ALTERNATIVES and searched_minutes < SEARCH_WINDOW_MINUTES:
        candidate_start += timedelta(minutes=SEARCH_STEP_MINUTES)
        searched_minutes += SEARCH_STEP_MINUTES
        attempts += 1

        candidate_end = appointment_end(candidate_start, duration_minutes)
        conflict = store.find_overlapping(
            db,
            tenant_id,
            employee_id,
            candidate_start,
            candidate_end,
            exclude_id=exclude_id,
        )
        if conflict is None:
            alternatives.append(candidate_start)

        if attempts >= MAX_SEARCH_ATTEMPTS:
            break

    return alternatives


def check_and_create(
    db: Session,
    tenant_id: int,
    employee_id,
    start: datetime,
    duration_minutes: int,
    now: datetime,
    client_name: str | None = None,
    client_phone: str | None = None,
    notes: str | None = None,
    price=None,
) -> Appointment:
    employee_id = parse_employee_id(employee_id)
    duration_minutes = parse_duration(duration_minutes)
    price = resolve_price(price)

    start = to_utc_naive(start)
    now = to_utc_naive(now)
    if start <= now:
        raise PastDateRejected(PAST_DATE_MESSAGE)

    alternatives: list[datetime] = []
    try:
        store.lock_employee(db, tenant_id, employee_id)
        appointment = store.insert_appointment(
            db,
            tenant_id=tenant_id,
            employee_id=employee_id,
            client_name=client_name,
            client_phone=client_phone,
            start=start,
            duration_minutes=duration_minutes,
            notes=notes,
            price=price,
            created_at=now,
        )
        if appointment is None:
            alternatives = find_alternatives(db, tenant_id, employee_id, start, duration_minutes)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Storage failure booking employee %s of tenant %s', employee_id, tenant_id)
        raise StorageFailure(STORAGE_FAILURE_MESSAGE) from exc

    if appointment is None:
        logger.info(
            'Booking conflict for employee %s of tenant %s at %s; %d alternatives',
            employee_id,
            tenant_id,
            start.isoformat(),
            len(alternatives),
        )
        raise SlotConflict(CONFLICT_MESSAGE, alternatives)

    logger.info('Booked appointment %s for employee %s of tenant %s', appointment.id, employee_id, tenant_id)
    return appointment


def reschedule(
    db: Session,
    tenant_id: int,
    appointment: Appointment,
    now: datetime,
    employee_id=None,
    start: datetime | None = None,
    duration_minutes: int | None = None,
    client_name: str | None = None,
    client_phone: str | None = None,
    notes: str | None = None,
    price=None,
) -> Appointment:
    """Apply an edit to ``appointment``; fields left as None keep their value.

    Moving the appointment (new start, duration or employee) re-runs the overlap
    check against every other booking of the target employee.
    """
    new_employee_id = appointment.employee_id if employee_id is None else parse_employee_id(employee_id)
    new_duration = appointment.duration_minutes if duration_minutes is None else parse_duration(duration_minutes)

    new_start = appointment.start_time
    if start is not None:
        new_start = to_utc_naive(start)
        if new_start <= to_utc_naive(now):
            raise PastDateRejected(PAST_DATE_MESSAGE)

    changes = {}
    if client_name is not None:
        changes['client_name'] = client_name
    if client_phone is not None:
        changes['client_phone'] = client_phone
    if notes is not None:
        changes['notes'] = notes
    if price is not None:
        changes['price'] = resolve_price(price)

    moved = (new_employee_id, new_start, new_duration) != (
        appointment.employee_id,
        appointment.start_time,
        appointment.duration_minutes,
    )

    appointment_id = appointment.id
    alternatives: list[datetime] = []
    try:
        if moved:
            store.lock_employee(db, tenant_id, new_employee_id)
            updated = store.update_appointment(
                db,
                appointment_id,
                tenant_id,
                new_employee_id,
                new_start,
                new_duration,
                **changes,
            )
            if not updated:
                alternatives = find_alternatives(
                    db,
                    tenant_id,
                    new_employee_id,
                    new_start,
                    new_duration,
                    exclude_id=appointment_id,
                )
        else:
            for field, value in changes.items():
                setattr(appointment, field, value)
            db.commit()
            updated = True
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Storage failure updating appointment %s of tenant %s', appointment_id, tenant_id)
        raise StorageFailure(STORAGE_FAILURE_MESSAGE) from exc

    if not updated:
        logger.info('Reschedule conflict for appointment %s of tenant %s', appointment_id, tenant_id)
        raise SlotConflict(CONFLICT_MESSAGE, alternatives)

    db.refresh(appointment)
    return appointment
