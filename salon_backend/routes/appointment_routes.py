from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_backend.auth.dependencies import get_current_tenant_id
from salon_backend.database import get_db
from salon_backend.models.appointment import Appointment
from salon_backend.routes.common import (
    database_unavailable,
    get_tenant_record,
    scheduling_http_error,
)
from salon_backend.scheduling import SchedulingError, check_and_create, reschedule
from salon_backend.scheduling.instants import utc_now

router = APIRouter(tags=['appointments'])

MAX_APPOINTMENT_NOTES_LENGTH = 600
CHAT_PHONE_SUFFIX = '@c.us'


def normalize_phone(value: str | None) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if normalized.endswith(CHAT_PHONE_SUFFIX):
        normalized = normalized[:-len(CHAT_PHONE_SUFFIX)]

    return normalized or None


def _normalize_notes(value: str | None) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if not normalized:
        return None

    if len(normalized) > MAX_APPOINTMENT_NOTES_LENGTH:
        raise ValueError(f'Notes must be {MAX_APPOINTMENT_NOTES_LENGTH} characters or fewer.')

    return normalized


def _numeric_or_none(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class CreateAppointmentRequest(BaseModel):
    employee_id: int | str
    client_name: str | None = None
    client_phone: str | None = None
    start_time: datetime
    duration_minutes: int
    notes: str | None = None
    price: float | None = None

    @field_validator('client_name')
    @classmethod
    def validate_client_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator('client_phone')
    @classmethod
    def validate_client_phone(cls, value: str | None) -> str | None:
        return normalize_phone(value)

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return _normalize_notes(value)

    @field_validator('price', mode='before')
    @classmethod
    def validate_price(cls, value):
        return _numeric_or_none(value)


class UpdateAppointmentRequest(BaseModel):
    employee_id: int | str | None = None
    client_name: str | None = None
    client_phone: str | None = None
    start_time: datetime | None = None
    duration_minutes: int | None = None
    notes: str | None = None
    price: float | None = None

    @field_validator('client_phone')
    @classmethod
    def validate_client_phone(cls, value: str | None) -> str | None:
        return normalize_phone(value)

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        return _normalize_notes(value)

    @field_validator('price', mode='before')
    @classmethod
    def validate_price(cls, value):
        return _numeric_or_none(value)


class AppointmentResponse(BaseModel):
    id: int
    employee_id: int
    client_name: str | None = None
    client_phone: str | None = None
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    notes: str | None = None
    price: float
    created_at: datetime

    class Config:
        from_attributes = True


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: CreateAppointmentRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        return check_and_create(
            db,
            tenant_id=tenant_id,
            employee_id=data.employee_id,
            start=data.start_time,
            duration_minutes=data.duration_minutes,
            now=utc_now(),
            client_name=data.client_name,
            client_phone=data.client_phone,
            notes=data.notes,
            price=data.price,
        )
    except SchedulingError as exc:
        raise scheduling_http_error(exc) from exc


@router.get('', response_model=list[AppointmentResponse])
def list_appointments(
    phone: str | None = Query(default=None),
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Appointment).filter(Appointment.tenant_id == tenant_id)

        if phone is not None:
            normalized_phone = normalize_phone(phone)
            if not normalized_phone:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail='Phone number is required.',
                )
            query = query.filter(Appointment.client_phone == normalized_phone)

        return query.order_by(Appointment.start_time.asc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.get('/employee/{employee_id}', response_model=list[AppointmentResponse])
def list_employee_appointments(
    employee_id: int,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        return db.query(Appointment).filter(
            Appointment.tenant_id == tenant_id,
            Appointment.employee_id == employee_id,
        ).order_by(Appointment.start_time.asc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.put('/{appointment_id}', response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: UpdateAppointmentRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        appointment = get_tenant_record(db, Appointment, appointment_id, tenant_id, 'Appointment')
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc

    try:
        return reschedule(
            db,
            tenant_id=tenant_id,
            appointment=appointment,
            now=utc_now(),
            employee_id=data.employee_id,
            start=data.start_time,
            duration_minutes=data.duration_minutes,
            client_name=data.client_name,
            client_phone=data.client_phone,
            notes=data.notes,
            price=data.price,
        )
    except SchedulingError as exc:
        raise scheduling_http_error(exc) from exc


@router.delete('/{appointment_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(
    appointment_id: int,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        appointment = get_tenant_record(db, Appointment, appointment_id, tenant_id, 'Appointment')
        db.delete(appointment)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
