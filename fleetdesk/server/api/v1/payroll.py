"""
API endpoints for payroll employees and pay records.

Gross and net pay of a record are computed on every write from the record's
figures and the employee's hourly rate.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, status

from fleetdesk.core.database.entities import PayrollEmployee, PayrollRecord, PayrollStatus
from fleetdesk.core.errors import EntityNotFoundError
from fleetdesk.core.models.io import (
    PayrollEmployeeCreate,
    PayrollEmployeeRead,
    PayrollEmployeeUpdate,
    PayrollRecordCreate,
    PayrollRecordRead,
    PayrollRecordUpdate,
)
from fleetdesk.finance.payroll import apply_pay, default_overtime_rate
from fleetdesk.server.services.deps import ReposDep

router = APIRouter(tags=["payroll"])


async def _require_employee(repos, employee_id: str) -> PayrollEmployee:
    employee = await repos.payroll_employees.get_by_id(employee_id)
    if employee is None:
        raise EntityNotFoundError("Payroll employee", employee_id)
    return employee


async def _require_record(repos, record_id: str) -> PayrollRecord:
    record = await repos.payroll_records.get_by_id(record_id)
    if record is None:
        raise EntityNotFoundError("Payroll record", record_id)
    return record


# Employees


@router.post(
    "/employees",
    response_model=PayrollEmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Payroll Employee",
)
async def create_employee(payload: PayrollEmployeeCreate, repos: ReposDep) -> PayrollEmployeeRead:
    employee = await repos.payroll_employees.create(PayrollEmployee.model_validate(payload))
    return PayrollEmployeeRead.model_validate(employee)


@router.get("/employees", response_model=List[PayrollEmployeeRead], summary="List Payroll Employees")
async def list_employees(repos: ReposDep, active_only: bool = False) -> List[PayrollEmployeeRead]:
    if active_only:
        employees = await repos.payroll_employees.list_active()
    else:
        employees = await repos.payroll_employees.list()
    return [PayrollEmployeeRead.model_validate(e) for e in employees]


@router.get("/employees/{employee_id}", response_model=PayrollEmployeeRead, summary="Get Payroll Employee")
async def get_employee(employee_id: str, repos: ReposDep) -> PayrollEmployeeRead:
    return PayrollEmployeeRead.model_validate(await _require_employee(repos, employee_id))


@router.patch("/employees/{employee_id}", response_model=PayrollEmployeeRead, summary="Update Payroll Employee")
async def update_employee(employee_id: str, payload: PayrollEmployeeUpdate, repos: ReposDep) -> PayrollEmployeeRead:
    employee = await _require_employee(repos, employee_id)
    employee = await repos.payroll_employees.apply_changes(employee, payload.model_dump(exclude_unset=True))
    return PayrollEmployeeRead.model_validate(employee)


@router.delete("/employees/{employee_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Payroll Employee")
async def delete_employee(employee_id: str, repos: ReposDep) -> None:
    if not await repos.payroll_employees.delete(employee_id):
        raise EntityNotFoundError("Payroll employee", employee_id)


@router.get(
    "/employees/{employee_id}/records",
    response_model=List[PayrollRecordRead],
    summary="List Employee Pay Records",
)
async def list_employee_records(employee_id: str, repos: ReposDep) -> List[PayrollRecordRead]:
    await _require_employee(repos, employee_id)
    records = await repos.payroll_records.list_for_employee(employee_id)
    return [PayrollRecordRead.model_validate(r) for r in records]


# Records


@router.post(
    "/records",
    response_model=PayrollRecordRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Pay Record",
    description="Record pay for a period. Gross and net pay are computed from the figures given.",
    responses={404: {"description": "Payroll employee not found"}},
)
async def create_record(payload: PayrollRecordCreate, repos: ReposDep) -> PayrollRecordRead:
    """
    Create a pay record.

    Hourly employees with **hours_worked** are paid hours times their hourly rate;
    everyone else is paid **base_salary**. Overtime, **bonuses** and **allowances**
    are added and **deductions** subtracted. Without an **overtime_rate** the
    employee's hourly rate times 1.5 is used.
    """
    employee = await _require_employee(repos, payload.employee_id)
    record = PayrollRecord.model_validate(payload)
    if "overtime_rate" not in payload.model_fields_set:
        record.overtime_rate = default_overtime_rate(employee.hourly_rate)
    record = apply_pay(record, employee.hourly_rate)
    record = await repos.payroll_records.create(record)
    return PayrollRecordRead.model_validate(record)


@router.get("/records", response_model=List[PayrollRecordRead], summary="List Pay Records")
async def list_records(
    repos: ReposDep,
    record_status: Optional[PayrollStatus] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[PayrollRecordRead]:
    records = await repos.payroll_records.list(limit=limit, offset=offset, filters={"status": record_status})
    return [PayrollRecordRead.model_validate(r) for r in records]


@router.get("/records/{record_id}", response_model=PayrollRecordRead, summary="Get Pay Record")
async def get_record(record_id: str, repos: ReposDep) -> PayrollRecordRead:
    return PayrollRecordRead.model_validate(await _require_record(repos, record_id))


@router.patch("/records/{record_id}", response_model=PayrollRecordRead, summary="Update Pay Record")
async def update_record(record_id: str, payload: PayrollRecordUpdate, repos: ReposDep) -> PayrollRecordRead:
    record = await _require_record(repos, record_id)
    employee = await repos.payroll_employees.get_by_id(record.employee_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(record, key, value)
    apply_pay(record, employee.hourly_rate if employee else None)
    record = await repos.payroll_records.update(record)
    return PayrollRecordRead.model_validate(record)


@router.delete("/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Pay Record")
async def delete_record(record_id: str, repos: ReposDep) -> None:
    if not await repos.payroll_records.delete(record_id):
        raise EntityNotFoundError("Payroll record", record_id)
