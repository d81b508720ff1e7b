"""
Device Registry Backend — Device SQLAlchemy Models
====================================================

What:  ORM models for the `device_type`, `device` and `device_employee` tables.
Who:   Queried by DeviceService; registered on Base.metadata for create_schema().

Table Design:
    - device.additional_properties: raw JSON text, stored exactly as the
      client sent it and decoded only when a device detail is read
    - device_employee: one row per assignment of a device to an employee.
      A device may have many rows over time; the current holder is the row
      with return_date NULL and the latest issue_date.
    - device_employee.device_id cascades on delete at the database level,
      so deleting a device never loads its assignment history
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.employee import Employee


class DeviceType(Base):
    """A named category of device ("PC", "Smartwatch", ...)."""

    __tablename__ = "device_type"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    devices: Mapped[List["Device"]] = relationship(back_populates="device_type")

    def __repr__(self) -> str:
        return f"<DeviceType(id={self.id}, name='{self.name}')>"


class Device(Base):
    """
    A physical device tracked by the registry.

    Query Patterns:
        - List devices: SELECT id, name FROM device ORDER BY id
        - Device detail: device + device_type + device_employee → employee → person
        - Lookup by id for update/delete: primary key
    """

    __tablename__ = "device"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Opaque JSON text; see app.schemas.properties.RawJson for decoding
    additional_properties: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="{}",
    )

    device_type_id: Mapped[int] = mapped_column(
        ForeignKey("device_type.id"),
        nullable=False,
    )

    device_type: Mapped[Optional[DeviceType]] = relationship(back_populates="devices")

    # passive_deletes: rely on ON DELETE CASCADE instead of loading the
    # collection (lazy loads are not allowed under AsyncSession)
    device_employees: Mapped[List["DeviceEmployee"]] = relationship(
        back_populates="device",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, name='{self.name}', type_id={self.device_type_id})>"


class DeviceEmployee(Base):
    """An assignment record: a device issued to an employee, optionally returned."""

    __tablename__ = "device_employee"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[int] = mapped_column(
        ForeignKey("device.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employee.id"),
        nullable=False,
    )
    issue_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    return_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    device: Mapped[Device] = relationship(back_populates="device_employees")
    employee: Mapped["Employee"] = relationship(back_populates="device_employees")

    __table_args__ = (
        Index("idx_device_employee_device_id", "device_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<DeviceEmployee(id={self.id}, device_id={self.device_id}, "
            f"employee_id={self.employee_id}, returned={self.return_date is not None})>"
        )
