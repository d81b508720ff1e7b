"""
Device Registry Backend — Device Route Handlers
=================================================

What:  CRUD endpoints under /api/devices.
How:   Each handler takes the request-scoped session, delegates to
       DeviceService, and sets status code and headers.

Status codes:
    GET    /api/devices        200
    GET    /api/devices/{id}   200 | 404 (empty body)
    POST   /api/devices        201 + Location | 404 "DeviceType not found."
    PUT    /api/devices/{id}   201 + Location | 404
    DELETE /api/devices/{id}   204 | 404

PUT answers 201 rather than 200; existing clients check for it.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ProblemDetails, ValidationProblemDetails
from app.schemas.device import CreateDeviceDto, DeviceDto, DeviceRecord, ShortDeviceDto
from app.services.device_service import device_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Devices"])

_SERVER_ERROR = {500: {"description": "Server error", "model": ProblemDetails}}
_NOT_FOUND = {404: {"description": "Device or device type not found"}}
_INVALID = {400: {"description": "Invalid request body", "model": ValidationProblemDetails}}


def _location(device_id: int) -> str:
    return f"/api/devices/{device_id}"


@router.get(
    "/devices",
    response_model=List[ShortDeviceDto],
    responses=_SERVER_ERROR,
    summary="List all devices",
)
async def list_devices(
    db: AsyncSession = Depends(get_db_session),
) -> List[ShortDeviceDto]:
    return await device_service.list_devices(db)


@router.get(
    "/devices/{device_id}",
    response_model=DeviceDto,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a device with its type and current holder",
)
async def get_device(
    device_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DeviceDto:
    """
    Returns the device's type name ("Unknown" when absent), decoded
    additional properties, and the employee currently holding it (or null).
    """
    return await device_service.get_device(db, device_id)


@router.post(
    "/devices",
    status_code=201,
    response_model=DeviceRecord,
    responses={**_INVALID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Create a device",
)
async def create_device(
    payload: CreateDeviceDto,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> DeviceRecord:
    record = await device_service.create_device(db, payload)
    response.headers["Location"] = _location(record.id)
    return record


@router.put(
    "/devices/{device_id}",
    status_code=201,
    response_model=DeviceRecord,
    responses={**_INVALID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace a device",
)
async def update_device(
    device_id: int,
    payload: CreateDeviceDto,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> DeviceRecord:
    record = await device_service.update_device(db, device_id, payload)
    response.headers["Location"] = _location(record.id)
    return record


@router.delete(
    "/devices/{device_id}",
    status_code=204,
    response_class=Response,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a device",
)
async def delete_device(
    device_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await device_service.delete_device(db, device_id)
    return Response(status_code=204)
