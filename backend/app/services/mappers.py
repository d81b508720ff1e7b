"""
Device Registry Backend — Row → DTO Mapping
=============================================

What:  Pure functions converting loaded ORM rows into response DTOs.
Why:   Services stay focused on querying; mapping rules (full names, the
       current holder of a device, the "Unknown" type fallback) live in one
       place and are testable without a database.
Who:   Called by DeviceService and EmployeeService.

All relationships passed in must already be loaded: these functions never
trigger IO.
"""

from typing import Iterable, Optional

from app.models.device import Device, DeviceEmployee
from app.models.employee import Employee
from app.schemas.device import CurrentEmployeeDto, DeviceDto, DeviceRecord, ShortDeviceDto
from app.schemas.employee import PersonDto, PositionDto, ShortEmployeeDto
from app.schemas.properties import RawJson

UNKNOWN_DEVICE_TYPE = "Unknown"


def format_full_name(
    first_name: str,
    last_name: str,
    middle_name: Optional[str] = None,
    include_middle: bool = False,
) -> str:
    """
    Builds a display name.

    With include_middle the middle segment is always emitted, so a missing
    middle name yields a double space ("Ann  Lee"). Existing clients of the
    employee listing depend on that shape.
    """
    if include_middle:
        return f"{first_name} {middle_name or ''} {last_name}"
    return f"{first_name} {last_name}"


def current_assignment(assignments: Iterable[DeviceEmployee]) -> Optional[DeviceEmployee]:
    """
    Returns the open assignment (no return date) with the latest issue date.

    Equal issue dates are resolved by the highest assignment id.
    """
    open_assignments = [a for a in assignments if a.return_date is None]
    if not open_assignments:
        return None
    return max(open_assignments, key=lambda a: (a.issue_date, a.id))


def to_short_device(device_id: int, name: str) -> ShortDeviceDto:
    return ShortDeviceDto(id=device_id, name=name)


def to_device_record(device: Device) -> DeviceRecord:
    return DeviceRecord(
        id=device.id,
        name=device.name,
        is_enabled=device.is_enabled,
        additional_properties=device.additional_properties,
        device_type_id=device.device_type_id,
    )


def to_device_detail(device: Device) -> DeviceDto:
    """
    Maps a device loaded with its type and assignment history.

    Raises:
        PayloadDecodeError: stored additional properties are not valid JSON
    """
    holder = None
    assignment = current_assignment(device.device_employees)
    if assignment is not None:
        person = assignment.employee.person
        holder = CurrentEmployeeDto(
            id=assignment.employee.id,
            full_name=format_full_name(person.first_name, person.last_name),
        )

    type_name = device.device_type.name if device.device_type is not None else UNKNOWN_DEVICE_TYPE

    return DeviceDto(
        name=device.name,
        type_name=type_name,
        is_enabled=device.is_enabled,
        additional_properties=RawJson(device.additional_properties).decode(),
        current_employee=holder,
    )


def to_short_employee(
    employee_id: int,
    first_name: str,
    middle_name: Optional[str],
    last_name: str,
) -> ShortEmployeeDto:
    return ShortEmployeeDto(
        id=employee_id,
        full_name=format_full_name(
            first_name, last_name, middle_name=middle_name, include_middle=True
        ),
    )


def to_employee_detail(employee: Employee) -> PersonDto:
    """Maps an employee loaded with its person and position."""
    person = employee.person
    return PersonDto(
        id=employee.id,
        passport_number=person.passport_number,
        first_name=person.first_name,
        middle_name=person.middle_name,
        last_name=person.last_name,
        phone_number=person.phone_number,
        email=person.email,
        salary=employee.salary,
        position=PositionDto(id=employee.position.id, name=employee.position.name),
        hire_date=employee.hire_date,
    )
