"""
Device Registry Backend — Employee SQLAlchemy Models
======================================================

What:  ORM models for the `person`, `position` and `employee` tables.
Who:   Queried by EmployeeService (listing, detail) and DeviceService
       (current holder of a device).

An employee is a person holding a position; personal data lives on Person
so the same person row can be referenced without duplicating it.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.device import DeviceEmployee


class Person(Base):
    __tablename__ = "person"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    passport_number: Mapped[str] = mapped_column(String(30), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False)

    employees: Mapped[List["Employee"]] = relationship(back_populates="person")

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, last_name='{self.last_name}')>"


class Position(Base):
    __tablename__ = "position"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    employees: Mapped[List["Employee"]] = relationship(back_populates="position")

    def __repr__(self) -> str:
        return f"<Position(id={self.id}, name='{self.name}')>"


class Employee(Base):
    """
    A person employed in a position.

    Query Patterns:
        - List employees: employee JOIN person, projected to id + names
        - Employee detail: employee + person + position in one round trip
    """

    __tablename__ = "employee"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[int] = mapped_column(ForeignKey("person.id"), nullable=False)
    position_id: Mapped[int] = mapped_column(ForeignKey("position.id"), nullable=False)
    salary: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    hire_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    person: Mapped[Person] = relationship(back_populates="employees")
    position: Mapped[Position] = relationship(back_populates="employees")
    device_employees: Mapped[List["DeviceEmployee"]] = relationship(
        back_populates="employee"
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, person_id={self.person_id})>"
