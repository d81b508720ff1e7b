"""
Device Registry Backend — Employee Response Schemas
=====================================================

What:  Pydantic models for GET /api/employees and GET /api/employees/{id}.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import PlainSerializer

from app.schemas.common import CamelModel

# Salaries are stored as NUMERIC but clients expect a JSON number,
# not pydantic's default string form for Decimal.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ShortEmployeeDto(CamelModel):
    id: int
    full_name: str


class PositionDto(CamelModel):
    id: int
    name: str


class PersonDto(CamelModel):
    """Full person/employee aggregate for the employee detail endpoint."""
    id: int
    passport_number: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    phone_number: str
    email: str
    salary: JsonDecimal
    position: PositionDto
    hire_date: datetime
