from __future__ import annotations

from typing import Any, Dict, List, Optional

from enterprise_ledger.core.ids import deep_copy
from enterprise_ledger.schemas.passports import (
    AttachmentCreate,
    DeviceHistoryCreate,
    DeviceHistoryEntry,
    DeviceModel,
    DeviceModelCreate,
    DeviceSearch,
    NetworkDevice,
    NetworkDeviceRegistration,
    NetworkDeviceUpdate,
    PassportMetadataUpdate,
    PassportTemplate,
    PassportTemplateCreate,
    ProductHistoryEntry,
    ProductPassport,
)
from enterprise_ledger.services.passports import DEFAULT_ACTOR, PassportService
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseStore
from .base import BaseRepository


class ProductPassportRepository(BaseRepository):
    """
    Repository for product passports, the device registry they describe and
    the passport templates per device model.
    """

    def __init__(self, store: EnterpriseStore) -> None:
        super().__init__(store)

    # Passports

    async def list_passports(self) -> List[ProductPassport]:
        return await self.read(lambda state: state.passports.passports)

    async def get_passport(self, passport_id: str) -> ProductPassport:
        return await self.read(lambda state: PassportService(state).get_passport(passport_id))

    async def get_draft_passport(self, device_id: str) -> Optional[ProductPassport]:
        return await self.read(lambda state: PassportService(state).find_draft(device_id))

    # PUBLIC_INTERFACE
    async def create_draft_passport(self, device_id: str, template_id: Optional[str] = None) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).create_draft_passport(device_id, template_id))

    # PUBLIC_INTERFACE
    async def apply_template(self, passport_id: str, template_id: str) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).apply_template(passport_id, template_id))

    # PUBLIC_INTERFACE
    async def update_passport_metadata(self, passport_id: str, patch: PassportMetadataUpdate) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).update_metadata(passport_id, patch))

    # PUBLIC_INTERFACE
    async def update_passport_values(self, passport_id: str, values: Dict[str, Any]) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).update_values(passport_id, values))

    # PUBLIC_INTERFACE
    async def append_history(self, passport_id: str, entry: ProductHistoryEntry) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).append_history(passport_id, entry))

    # PUBLIC_INTERFACE
    async def add_attachment(self, passport_id: str, payload: AttachmentCreate) -> ProductPassport:
        """Attach a document; the passport history records the upload."""
        async with self.transaction() as state:
            return deep_copy(PassportService(state).add_attachment(passport_id, payload))

    # PUBLIC_INTERFACE
    async def finalize_passport(self, passport_id: str, actor: str = DEFAULT_ACTOR) -> ProductPassport:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).finalize_passport(passport_id, actor))

    # Devices

    async def list_devices(self, query: Optional[str] = None) -> List[NetworkDevice]:
        return await self.read(lambda state: PassportService(state).list_devices(query))

    async def search_devices(self, filters: DeviceSearch) -> List[NetworkDevice]:
        return await self.read(lambda state: PassportService(state).search_devices(filters))

    # PUBLIC_INTERFACE
    async def create_device(self, payload: NetworkDeviceRegistration) -> NetworkDevice:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).create_device(payload))

    # PUBLIC_INTERFACE
    async def update_device(self, device_id: str, patch: NetworkDeviceUpdate) -> NetworkDevice:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).update_device(device_id, patch))

    async def get_device_history(self, device_id: str) -> List[DeviceHistoryEntry]:
        """Device history, newest first."""
        return await self.read(lambda state: PassportService(state).device_history(device_id))

    # PUBLIC_INTERFACE
    async def append_device_history(self, device_id: str, payload: DeviceHistoryCreate) -> DeviceHistoryEntry:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).append_device_history(device_id, payload))

    async def list_device_models(self) -> List[DeviceModel]:
        return await self.read(lambda state: state.passports.device_models)

    # PUBLIC_INTERFACE
    async def create_device_model(self, payload: DeviceModelCreate) -> DeviceModel:
        async with self.transaction() as state:
            model = self.upsert(state.passports.device_models, DeviceModel(id="", **payload.model_dump()), "device-model")
            return deep_copy(model)

    # Templates

    async def list_templates(self, device_model_id: Optional[str] = None) -> List[PassportTemplate]:
        return await self.read(
            lambda state: [
                t for t in state.passports.templates if device_model_id is None or t.device_model_id == device_model_id
            ]
        )

    async def get_template(self, template_id: str) -> PassportTemplate:
        return await self.read(lambda state: PassportService(state).get_template(template_id))

    async def get_active_template(self, device_model_id: str) -> Optional[PassportTemplate]:
        return await self.read(lambda state: PassportService(state).find_active_template(device_model_id))

    # PUBLIC_INTERFACE
    async def create_template(self, payload: PassportTemplateCreate) -> PassportTemplate:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).create_template(payload))

    # PUBLIC_INTERFACE
    async def set_template_active(self, template_id: str) -> PassportTemplate:
        async with self.transaction() as state:
            return deep_copy(PassportService(state).set_template_active(template_id))

    # PUBLIC_INTERFACE
    async def save_template_from_passport(
        self, passport_id: str, name: str, description: Optional[str] = None, set_active: bool = False
    ) -> PassportTemplate:
        async with self.transaction() as state:
            return deep_copy(
                PassportService(state).save_template_from_passport(passport_id, name, description, set_active)
            )


passport_repository = ProductPassportRepository(enterprise_store)
