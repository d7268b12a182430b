"""
Payroll employee and record repositories.
"""

from __future__ import annotations

from typing import List

from sqlmodel import select

from ..entities.payroll import PayrollEmployee, PayrollRecord
from .base import SQLModelRepository


class PayrollEmployeeRepository(SQLModelRepository[PayrollEmployee]):
    """Repository for payroll employees."""

    model = PayrollEmployee

    async def list_active(self) -> List[PayrollEmployee]:
        stmt = select(PayrollEmployee).where(PayrollEmployee.is_active == True).order_by(PayrollEmployee.name)  # noqa: E712
        return await self._fetch_all(stmt)


class PayrollRecordRepository(SQLModelRepository[PayrollRecord]):
    """Repository for payroll records."""

    model = PayrollRecord
    default_order = "pay_period_start"

    async def list_for_employee(self, employee_id: str) -> List[PayrollRecord]:
        stmt = (
            select(PayrollRecord)
            .where(PayrollRecord.employee_id == employee_id)
            .order_by(PayrollRecord.pay_period_start.desc())
        )
        return await self._fetch_all(stmt)
