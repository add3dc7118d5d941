from datetime import date

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from salon_backend.models.employee import Employee
from salon_backend.routes.employee_routes import (
    CreateEmployeeRequest,
    UpdateEmployeeRequest,
    create_employee,
    delete_employee,
    list_employees,
    update_employee,
)


def test_create_employee_request_normalizes_fields() -> None:
    request = CreateEmployeeRequest(first_name=' Lucia ', email=' LUCIA@EXAMPLE.COM ', phone='  ')

    assert request.first_name == 'Lucia'
    assert request.email == 'lucia@example.com'
    assert request.phone is None


def test_create_employee_request_rejects_blank_first_name() -> None:
    with pytest.raises(ValidationError):
        CreateEmployeeRequest(first_name='   ')


def test_create_and_list_employees_are_tenant_scoped(db, tenant, other_tenant) -> None:
    create_employee(data=CreateEmployeeRequest(first_name='Marta', hired_on=date(2029, 3, 1)), tenant_id=tenant.id, db=db)
    create_employee(data=CreateEmployeeRequest(first_name='Ana'), tenant_id=tenant.id, db=db)
    create_employee(data=CreateEmployeeRequest(first_name='Irene'), tenant_id=other_tenant.id, db=db)

    employees = list_employees(tenant_id=tenant.id, db=db)

    assert [employee.first_name for employee in employees] == ['Ana', 'Marta']
    assert all(employee.active for employee in employees)


def test_update_employee_applies_changes(db, tenant, employee) -> None:
    updated = update_employee(
        employee_id=employee.id,
        data=UpdateEmployeeRequest(phone='611222333', active=False),
        tenant_id=tenant.id,
        db=db,
    )

    assert updated.phone == '611222333'
    assert updated.active is False
    assert updated.first_name == 'Lucia'


def test_update_employee_requires_changes(db, tenant, employee) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_employee(employee_id=employee.id, data=UpdateEmployeeRequest(), tenant_id=tenant.id, db=db)

    assert exception_info.value.status_code == 400


def test_update_employee_rejects_other_tenant(db, other_tenant, employee) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_employee(
            employee_id=employee.id,
            data=UpdateEmployeeRequest(first_name='Eva'),
            tenant_id=other_tenant.id,
            db=db,
        )

    assert exception_info.value.status_code == 403


def test_delete_employee(db, tenant, employee) -> None:
    delete_employee(employee_id=employee.id, tenant_id=tenant.id, db=db)

    assert db.query(Employee).count() == 0


def test_delete_employee_returns_not_found_when_missing(db, tenant) -> None:
    with pytest.raises(HTTPException) as exception_info:
        delete_employee(employee_id=999, tenant_id=tenant.id, db=db)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Employee not found.'
