from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_backend.auth.dependencies import get_current_tenant_id
from salon_backend.database import get_db
from salon_backend.models.employee import Employee
from salon_backend.routes.common import database_unavailable, get_tenant_record

router = APIRouter(tags=['employees'])


def _strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class CreateEmployeeRequest(BaseModel):
    first_name: str
    last_name: str | None = None
    second_last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    hired_on: date | None = None

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('First name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        normalized = _strip_optional(value)
        return normalized.lower() if normalized else None

    @field_validator('last_name', 'second_last_name', 'phone')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        return _strip_optional(value)


class UpdateEmployeeRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    second_last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    active: bool | None = None

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            raise ValueError('First name cannot be blank.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        normalized = _strip_optional(value)
        return normalized.lower() if normalized else None


class EmployeeResponse(BaseModel):
    id: int
    first_name: str
    last_name: str | None = None
    second_last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    hired_on: date | None = None
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True


@router.post('', response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: CreateEmployeeRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        employee = Employee(tenant_id=tenant_id, **data.model_dump())
        db.add(employee)
        db.commit()
        db.refresh(employee)

        return employee
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.get('', response_model=list[EmployeeResponse])
def list_employees(
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        return db.query(Employee).filter(
            Employee.tenant_id == tenant_id,
        ).order_by(Employee.first_name.asc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.put('/{employee_id}', response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    data: UpdateEmployeeRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    changes = data.model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='No changes supplied.',
        )

    try:
        employee = get_tenant_record(db, Employee, employee_id, tenant_id, 'Employee')
        for field, value in changes.items():
            setattr(employee, field, value)
        db.commit()
        db.refresh(employee)

        return employee
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.delete('/{employee_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        employee = get_tenant_record(db, Employee, employee_id, tenant_id, 'Employee')
        db.delete(employee)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
