from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from enterprise_ledger.core.deps import get_passport_repository
from enterprise_ledger.repositories.passports import ProductPassportRepository
from enterprise_ledger.schemas.passports import (
    AttachmentCreate,
    DeviceHistoryCreate,
    DeviceHistoryEntry,
    DeviceModel,
    DeviceModelCreate,
    DeviceSearch,
    DraftPassportCreate,
    NetworkDevice,
    NetworkDeviceRegistration,
    NetworkDeviceUpdate,
    PassportFinalize,
    PassportMetadataUpdate,
    PassportTemplate,
    PassportTemplateCreate,
    ProductHistoryEntry,
    ProductPassport,
    TemplateFromPassport,
)

router = APIRouter(prefix="/passports", tags=["Passports"])


# Devices

# PUBLIC_INTERFACE
@router.get("/devices", response_model=List[NetworkDevice], summary="List devices")
async def list_devices(
    q: Optional[str] = Query(None, description="Substring of tag, serial, IP, owner or location"),
    asset_tag: Optional[str] = Query(None, alias="assetTag"),
    device_model_id: Optional[str] = Query(None, alias="deviceModelId"),
    serial_number: Optional[str] = Query(None, alias="serialNumber"),
    ip_address: Optional[str] = Query(None, alias="ipAddress"),
    status: Optional[str] = Query(None),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> List[NetworkDevice]:
    """
    Free-text search with ``q``; any of the field filters switches to a
    structured search where every given filter must match.
    """
    filters = DeviceSearch(
        asset_tag=asset_tag,
        device_model_id=device_model_id,
        serial_number=serial_number,
        ip_address=ip_address,
        status=status,
    )
    if filters.model_dump(exclude_none=True):
        return await repo.search_devices(filters)
    return await repo.list_devices(q)


# PUBLIC_INTERFACE
@router.post("/devices", response_model=NetworkDevice, summary="Register device")
async def create_device(
    payload: NetworkDeviceRegistration,
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> NetworkDevice:
    return await repo.create_device(payload)


# PUBLIC_INTERFACE
@router.patch("/devices/{device_id}", response_model=NetworkDevice, summary="Update device")
async def update_device(
    payload: NetworkDeviceUpdate,
    device_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> NetworkDevice:
    return await repo.update_device(device_id, payload)


# PUBLIC_INTERFACE
@router.get("/devices/{device_id}/history", response_model=List[DeviceHistoryEntry], summary="Device history")
async def get_device_history(
    device_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> List[DeviceHistoryEntry]:
    return await repo.get_device_history(device_id)


# PUBLIC_INTERFACE
@router.post("/devices/{device_id}/history", response_model=DeviceHistoryEntry, summary="Append device history")
async def append_device_history(
    payload: DeviceHistoryCreate,
    device_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> DeviceHistoryEntry:
    return await repo.append_device_history(device_id, payload)


# PUBLIC_INTERFACE
@router.get(
    "/devices/{device_id}/draft",
    response_model=Optional[ProductPassport],
    response_model_exclude_none=True,
    summary="Open draft passport of a device",
)
async def get_draft_passport(
    device_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> Optional[ProductPassport]:
    return await repo.get_draft_passport(device_id)


# PUBLIC_INTERFACE
@router.get("/device-models", response_model=List[DeviceModel], response_model_exclude_none=True, summary="List device models")
async def list_device_models(repo: ProductPassportRepository = Depends(get_passport_repository)) -> List[DeviceModel]:
    return await repo.list_device_models()


# PUBLIC_INTERFACE
@router.post("/device-models", response_model=DeviceModel, response_model_exclude_none=True, summary="Create device model")
async def create_device_model(
    payload: DeviceModelCreate,
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> DeviceModel:
    return await repo.create_device_model(payload)


# Templates

# PUBLIC_INTERFACE
@router.get("/templates", response_model=List[PassportTemplate], response_model_exclude_none=True, summary="List templates")
async def list_templates(
    device_model_id: Optional[str] = Query(None, alias="deviceModelId"),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> List[PassportTemplate]:
    return await repo.list_templates(device_model_id)


# PUBLIC_INTERFACE
@router.get(
    "/templates/active",
    response_model=Optional[PassportTemplate],
    response_model_exclude_none=True,
    summary="Active template of a device model",
)
async def get_active_template(
    device_model_id: str = Query(..., alias="deviceModelId"),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> Optional[PassportTemplate]:
    return await repo.get_active_template(device_model_id)


# PUBLIC_INTERFACE
@router.post("/templates", response_model=PassportTemplate, response_model_exclude_none=True, summary="Create template")
async def create_template(
    payload: PassportTemplateCreate,
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> PassportTemplate:
    return await repo.create_template(payload)


# PUBLIC_INTERFACE
@router.get("/templates/{template_id}", response_model=PassportTemplate, response_model_exclude_none=True, summary="Get template")
async def get_template(
    template_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> PassportTemplate:
    return await repo.get_template(template_id)


# PUBLIC_INTERFACE
@router.post(
    "/templates/{template_id}/activate",
    response_model=PassportTemplate,
    response_model_exclude_none=True,
    summary="Activate template",
    description="Make the template the only active one of its device model.",
)
async def set_template_active(
    template_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> PassportTemplate:
    return await repo.set_template_active(template_id)


# Passports

# PUBLIC_INTERFACE
@router.get("", response_model=List[ProductPassport], response_model_exclude_none=True, summary="List passports")
async def list_passports(repo: ProductPassportRepository = Depends(get_passport_repository)) -> List[ProductPassport]:
    return await repo.list_passports()


# PUBLIC_INTERFACE
@router.post("", response_model=ProductPassport, response_model_exclude_none=True, summary="Create draft passport")
async def create_draft_passport(
    payload: DraftPassportCreate,
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.create_draft_passport(payload.device_id, payload.template_id)


# PUBLIC_INTERFACE
@router.get("/{passport_id}", response_model=ProductPassport, response_model_exclude_none=True, summary="Get passport")
async def get_passport(
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.get_passport(passport_id)


# PUBLIC_INTERFACE
@router.patch(
    "/{passport_id}/metadata",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Update passport metadata",
)
async def update_passport_metadata(
    payload: PassportMetadataUpdate,
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.update_passport_metadata(passport_id, payload)


# PUBLIC_INTERFACE
@router.patch(
    "/{passport_id}/values",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Merge passport field values",
)
async def update_passport_values(
    payload: Dict[str, Any],
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.update_passport_values(passport_id, payload)


# PUBLIC_INTERFACE
@router.post(
    "/{passport_id}/template/{template_id}",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Apply template",
)
async def apply_template(
    passport_id: str = Path(...),
    template_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.apply_template(passport_id, template_id)


# PUBLIC_INTERFACE
@router.post(
    "/{passport_id}/save-template",
    response_model=PassportTemplate,
    response_model_exclude_none=True,
    summary="Save passport fields as template",
)
async def save_template_from_passport(
    payload: TemplateFromPassport,
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> PassportTemplate:
    return await repo.save_template_from_passport(passport_id, payload.name, payload.description, payload.set_active)


# PUBLIC_INTERFACE
@router.post(
    "/{passport_id}/finalize",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Finalize passport",
)
async def finalize_passport(
    payload: PassportFinalize,
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.finalize_passport(passport_id, payload.actor)


# PUBLIC_INTERFACE
@router.post(
    "/{passport_id}/history",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Append history entry",
)
async def append_history(
    payload: ProductHistoryEntry,
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.append_history(passport_id, payload)


# PUBLIC_INTERFACE
@router.post(
    "/{passport_id}/attachments",
    response_model=ProductPassport,
    response_model_exclude_none=True,
    summary="Add attachment",
)
async def add_attachment(
    payload: AttachmentCreate,
    passport_id: str = Path(...),
    repo: ProductPassportRepository = Depends(get_passport_repository),
) -> ProductPassport:
    return await repo.add_attachment(passport_id, payload)
