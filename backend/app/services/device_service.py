"""
Device Registry Backend — Device Service
==========================================

What:  Queries and mutations behind the /api/devices endpoints.
Why:   Keeps SQL and mapping out of the route handlers.
How:   Each method issues one query, or one read followed by one write, on
       the request-scoped AsyncSession, then maps the rows to DTOs.
Who:   Called by app.routes.devices.

Error Handling Strategy:
    - Missing rows become NotFoundError (→ 404)
    - Malformed stored JSON surfaces as PayloadDecodeError (→ 500)
    - Anything else is logged and wrapped in DatabaseError whose title names
      the failed operation and whose message is the underlying error text

Writes are committed inside the service so the response reflects the
persisted row (generated id included).
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import DatabaseError, DeviceRegistryError, NotFoundError
from app.models.device import Device, DeviceEmployee, DeviceType
from app.models.employee import Employee
from app.schemas.device import CreateDeviceDto, DeviceDto, DeviceRecord, ShortDeviceDto
from app.services import mappers

logger = logging.getLogger(__name__)

DEVICE_TYPE_NOT_FOUND = "DeviceType not found."


class DeviceService:
    """
    Business logic layer for device operations.

    Stateless: every call receives its session, so one instance is shared by
    all requests.
    """

    async def list_devices(self, db: AsyncSession) -> List[ShortDeviceDto]:
        """
        Returns id and name of every device.

        Query plan:
            SELECT id, name FROM device ORDER BY id
        """
        try:
            result = await db.execute(select(Device.id, Device.name).order_by(Device.id))
            return [mappers.to_short_device(row.id, row.name) for row in result.all()]
        except Exception as e:
            logger.error("Database error listing devices: %s", str(e), exc_info=True)
            raise DatabaseError(message=str(e), title="Server error")

    async def get_device(self, db: AsyncSession, device_id: int) -> DeviceDto:
        """
        Returns the device detail including its current holder.

        The device type is loaded with the device; assignment records and
        their employee → person chain are loaded with selectin queries so
        the mapper never lazy-loads.

        Raises:
            NotFoundError: no device with this id
            PayloadDecodeError: stored additional properties are not valid JSON
            DatabaseError: query failed
        """
        try:
            result = await db.execute(
                select(Device)
                .where(Device.id == device_id)
                .options(
                    selectinload(Device.device_type),
                    selectinload(Device.device_employees)
                    .selectinload(DeviceEmployee.employee)
                    .selectinload(Employee.person),
                )
            )
            device = result.scalar_one_or_none()

            if device is None:
                raise NotFoundError(resource="device", resource_id=device_id)

            return mappers.to_device_detail(device)

        except DeviceRegistryError:
            raise
        except Exception as e:
            logger.error("Database error fetching device %s: %s", device_id, str(e), exc_info=True)
            raise DatabaseError(
                message=str(e),
                title="Server error",
                context={"device_id": device_id},
            )

    async def create_device(self, db: AsyncSession, payload: CreateDeviceDto) -> DeviceRecord:
        """
        Inserts a device referencing the device type named in the payload.

        Raises:
            NotFoundError: no device type with that name; nothing is inserted
            DatabaseError: insert failed
        """
        try:
            device_type = await self._find_device_type(db, payload.type)

            device = Device(
                name=payload.name,
                is_enabled=payload.is_enabled,
                additional_properties=payload.additional_properties,
                device_type_id=device_type.id,
            )
            db.add(device)
            await db.commit()
            logger.info("Device %s created (type=%s)", device.id, device_type.name)

            return mappers.to_device_record(device)

        except DeviceRegistryError:
            raise
        except Exception as e:
            logger.error("Database error creating device: %s", str(e), exc_info=True)
            raise DatabaseError(message=str(e), title="Cannot create new device")

    async def update_device(
        self, db: AsyncSession, device_id: int, payload: CreateDeviceDto
    ) -> DeviceRecord:
        """
        Replaces name, enabled flag, additional properties and device type.

        No concurrency token: two concurrent updates are last-write-wins.

        Raises:
            NotFoundError: unknown device id or device type name
            DatabaseError: update failed
        """
        try:
            device = await self._find_device(db, device_id)
            device_type = await self._find_device_type(db, payload.type)

            device.name = payload.name
            device.is_enabled = payload.is_enabled
            device.additional_properties = payload.additional_properties
            device.device_type_id = device_type.id

            await db.commit()
            logger.info("Device %s updated", device.id)

            return mappers.to_device_record(device)

        except DeviceRegistryError:
            raise
        except Exception as e:
            logger.error("Database error updating device %s: %s", device_id, str(e), exc_info=True)
            raise DatabaseError(
                message=str(e),
                title="Cannot update device",
                context={"device_id": device_id},
            )

    async def delete_device(self, db: AsyncSession, device_id: int) -> None:
        """
        Deletes a device. Its assignment records go with it (ON DELETE CASCADE).

        Raises:
            NotFoundError: no device with this id
            DatabaseError: delete failed
        """
        try:
            device = await self._find_device(db, device_id)
            await db.delete(device)
            await db.commit()
            logger.info("Device %s deleted", device_id)

        except DeviceRegistryError:
            raise
        except Exception as e:
            logger.error("Database error deleting device %s: %s", device_id, str(e), exc_info=True)
            raise DatabaseError(
                message=str(e),
                title="Cannot delete the device",
                context={"device_id": device_id},
            )

    # ── Lookups ───────────────────────────────────────────────────────────

    async def _find_device(self, db: AsyncSession, device_id: int) -> Device:
        result = await db.execute(select(Device).where(Device.id == device_id))
        device = result.scalar_one_or_none()
        if device is None:
            raise NotFoundError(
                resource="device",
                resource_id=device_id,
                detail=f"Device with ID {device_id} not found.",
            )
        return device

    async def _find_device_type(self, db: AsyncSession, name: str) -> DeviceType:
        # Exact match on name; device_type.name is unique
        result = await db.execute(select(DeviceType).where(DeviceType.name == name))
        device_type = result.scalar_one_or_none()
        if device_type is None:
            raise NotFoundError(resource="device type", detail=DEVICE_TYPE_NOT_FOUND)
        return device_type


# ── Singleton Instance ────────────────────────────────────────────────────
device_service = DeviceService()
