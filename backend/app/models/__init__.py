# Models package init
# Importing every model here registers all tables on Base.metadata.
from app.models.device import Device, DeviceEmployee, DeviceType
from app.models.employee import Employee, Person, Position

__all__ = [
    "Device",
    "DeviceEmployee",
    "DeviceType",
    "Employee",
    "Person",
    "Position",
]
