"""
Device Registry Backend — Employee Route Handlers
===================================================

What:  Read-only endpoints under /api/employees.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ProblemDetails
from app.schemas.employee import PersonDto, ShortEmployeeDto
from app.services.employee_service import employee_service

router = APIRouter(prefix="/api", tags=["Employees"])


@router.get(
    "/employees",
    response_model=List[ShortEmployeeDto],
    responses={500: {"description": "Server error", "model": ProblemDetails}},
    summary="List all employees",
)
async def list_employees(
    db: AsyncSession = Depends(get_db_session),
) -> List[ShortEmployeeDto]:
    return await employee_service.list_employees(db)


@router.get(
    "/employees/{employee_id}",
    response_model=PersonDto,
    responses={
        404: {"description": "Employee not found"},
        500: {"description": "Server error", "model": ProblemDetails},
    },
    summary="Get an employee with personal data and position",
)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> PersonDto:
    return await employee_service.get_employee(db, employee_id)
