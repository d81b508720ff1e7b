"""
Device Registry Backend — Employee Service
============================================

What:  Read-only queries behind the /api/employees endpoints.
Who:   Called by app.routes.employees.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.exceptions import DatabaseError, DeviceRegistryError, NotFoundError
from app.models.employee import Employee, Person
from app.schemas.employee import PersonDto, ShortEmployeeDto
from app.services import mappers

logger = logging.getLogger(__name__)


class EmployeeService:

    async def list_employees(self, db: AsyncSession) -> List[ShortEmployeeDto]:
        """
        Returns id and full name (middle name included) of every employee.

        Query plan:
            SELECT employee.id, person.first_name, person.middle_name, person.last_name
            FROM employee JOIN person ON person.id = employee.person_id
            ORDER BY employee.id
        """
        try:
            result = await db.execute(
                select(
                    Employee.id,
                    Person.first_name,
                    Person.middle_name,
                    Person.last_name,
                )
                .join(Employee.person)
                .order_by(Employee.id)
            )
            return [
                mappers.to_short_employee(
                    row.id, row.first_name, row.middle_name, row.last_name
                )
                for row in result.all()
            ]
        except Exception as e:
            logger.error("Database error listing employees: %s", str(e), exc_info=True)
            raise DatabaseError(message=str(e), title="Server error")

    async def get_employee(self, db: AsyncSession, employee_id: int) -> PersonDto:
        """
        Returns the person/employee aggregate, loaded in one joined query.

        Raises:
            NotFoundError: no employee with this id
            DatabaseError: query failed
        """
        try:
            result = await db.execute(
                select(Employee)
                .where(Employee.id == employee_id)
                .options(joinedload(Employee.person), joinedload(Employee.position))
            )
            employee = result.scalar_one_or_none()

            if employee is None:
                raise NotFoundError(resource="employee", resource_id=employee_id)

            return mappers.to_employee_detail(employee)

        except DeviceRegistryError:
            raise
        except Exception as e:
            logger.error(
                "Database error fetching employee %s: %s", employee_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=str(e),
                title="Server error",
                context={"employee_id": employee_id},
            )


employee_service = EmployeeService()
