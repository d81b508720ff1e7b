"""
Device Registry Backend — Device Request/Response Schemas
===========================================================

What:  Pydantic models defining the device API contract.
Who:   Used by device routes as request bodies and response models.

Shapes:
    CreateDeviceDto   → POST/PUT body
    ShortDeviceDto    → GET /api/devices items
    DeviceDto         → GET /api/devices/{id}
    DeviceRecord      → POST/PUT response (the persisted row, including ids)
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field

from app.schemas.common import CamelModel


class CreateDeviceDto(CamelModel):
    """
    Request body for creating or replacing a device.

    All fields are required; strings must be non-empty. `additional_properties`
    is opaque JSON text and is stored exactly as sent.

    Strict: only the camelCase keys are accepted and values are not coerced
    ("yes" or 1 is not a boolean).
    """
    model_config = ConfigDict(populate_by_name=False, strict=True)

    name: str = Field(min_length=1, description="Device name")
    type: str = Field(min_length=1, description="Name of an existing device type")
    is_enabled: bool = Field(description="Whether the device is enabled")
    additional_properties: str = Field(
        min_length=1,
        description='Raw JSON text, e.g. "{\\"ram\\": \\"16GB\\"}"',
    )


class ShortDeviceDto(CamelModel):
    id: int
    name: str


class CurrentEmployeeDto(CamelModel):
    """The employee currently holding a device."""
    id: int
    full_name: str


class DeviceDto(CamelModel):
    """Device detail; `current_employee` is null when nobody holds the device."""
    name: str
    type_name: str
    is_enabled: bool
    additional_properties: Any = Field(description="Decoded additional properties")
    current_employee: Optional[CurrentEmployeeDto] = None


class DeviceRecord(CamelModel):
    """The full persisted device row returned after create/update."""
    id: int
    name: str
    is_enabled: bool
    additional_properties: str
    device_type_id: int
