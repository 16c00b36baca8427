from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from enterprise_ledger.core.errors import DomainError, NotFoundError
from enterprise_ledger.core.ids import deep_copy, new_id, utcnow
from enterprise_ledger.schemas.passports import (
    AttachmentCreate,
    DeviceHistoryCreate,
    DeviceHistoryEntry,
    DeviceModel,
    DeviceSearch,
    NetworkDevice,
    NetworkDeviceRegistration,
    NetworkDeviceUpdate,
    PassportMetadataUpdate,
    PassportTemplate,
    PassportTemplateCreate,
    PassportTemplateField,
    ProductHistoryEntry,
    ProductPassport,
    ProductPassportAttachment,
)
from enterprise_ledger.services.base import BaseService

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "dev-admin"
UNKNOWN_MODEL = "Unknown model"

# Template field keys filled from the device record when a draft is built.
_AUTOFILL_SOURCES = {
    "assetTag": "asset_tag",
    "inventoryNumber": "asset_tag",
    "productName": "model",
    "model": "model",
    "modelName": "model",
    "serialNumber": "serial_number",
    "serial": "serial_number",
    "location": "location",
    "owner": "owner",
    "responsible": "owner",
}


class PassportService(BaseService):
    """
    Device registry, passport templates and the passport lifecycle.

    A passport is drafted from a device, optionally shaped by a template whose
    fields are pre-filled from the device record, edited, and finalized to
    ``ready``. Every lifecycle step stamps ``updated_at`` and appends to the
    passport history.
    """

    # Lookups

    def get_passport(self, passport_id: str) -> ProductPassport:
        passport = next((p for p in self.state.passports.passports if p.id == passport_id), None)
        if passport is None:
            raise NotFoundError("Passport", passport_id)
        return passport

    def get_device(self, device_id: str) -> NetworkDevice:
        device = next((d for d in self.state.passports.devices if d.id == device_id), None)
        if device is None:
            raise NotFoundError("Device", device_id)
        return device

    def get_template(self, template_id: str) -> PassportTemplate:
        template = next((t for t in self.state.passports.templates if t.id == template_id), None)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    def find_device_model(self, device_model_id: str) -> Optional[DeviceModel]:
        return next((m for m in self.state.passports.device_models if m.id == device_model_id), None)

    def find_active_template(self, device_model_id: str) -> Optional[PassportTemplate]:
        return next(
            (t for t in self.state.passports.templates if t.device_model_id == device_model_id and t.is_active),
            None,
        )

    def find_draft(self, device_id: str) -> Optional[ProductPassport]:
        return next(
            (p for p in self.state.passports.passports if p.device_id == device_id and p.status == "draft"),
            None,
        )

    # Devices

    def search_devices(self, filters: DeviceSearch) -> List[NetworkDevice]:
        def contains(value: str, needle: Optional[str]) -> bool:
            return not needle or needle.lower() in value.lower()

        return [
            device
            for device in self.state.passports.devices
            if contains(device.asset_tag, filters.asset_tag)
            and contains(device.serial_number, filters.serial_number)
            and contains(device.ip_address, filters.ip_address)
            and (not filters.device_model_id or device.device_model_id == filters.device_model_id)
            and (not filters.status or device.status == filters.status)
        ]

    def list_devices(self, query: Optional[str] = None) -> List[NetworkDevice]:
        """Devices whose tag, serial, IP, owner or location contains ``query``."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.state.passports.devices
        return [
            device
            for device in self.state.passports.devices
            if needle in " ".join(
                [device.asset_tag, device.serial_number, device.ip_address, device.owner, device.location]
            ).lower()
        ]

    # PUBLIC_INTERFACE
    def create_device(self, payload: NetworkDeviceRegistration) -> NetworkDevice:
        device = NetworkDevice(id=new_id("device"), **payload.model_dump(exclude={"history_note"}))
        self.state.passports.devices.append(device)
        self._device_history(device.id).append(
            DeviceHistoryEntry(
                id=new_id("history"),
                device_id=device.id,
                ts=utcnow(),
                action="Device registered",
                details=payload.history_note or "Registered through the passport wizard.",
                actor=DEFAULT_ACTOR,
            )
        )
        logger.info("Registered device %s (%s)", device.id, device.asset_tag)
        return device

    # PUBLIC_INTERFACE
    def update_device(self, device_id: str, patch: NetworkDeviceUpdate) -> NetworkDevice:
        device = self.get_device(device_id)
        for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(device, field, value)
        return device

    def device_history(self, device_id: str) -> List[DeviceHistoryEntry]:
        return self.state.passports.device_history.get(device_id, [])

    # PUBLIC_INTERFACE
    def append_device_history(self, device_id: str, payload: DeviceHistoryCreate) -> DeviceHistoryEntry:
        """Prepend an entry to the device history (newest first)."""
        entry = DeviceHistoryEntry(id=new_id("history"), device_id=device_id, **payload.model_dump())
        self._device_history(device_id).insert(0, entry)
        return entry

    def _device_history(self, device_id: str) -> List[DeviceHistoryEntry]:
        return self.state.passports.device_history.setdefault(device_id, [])

    # Templates

    # PUBLIC_INTERFACE
    def create_template(self, payload: PassportTemplateCreate) -> PassportTemplate:
        template = PassportTemplate(
            id=new_id("template"),
            device_model_id=payload.device_model_id,
            name=payload.name,
            description=payload.description,
            version=self._next_template_version(payload.device_model_id),
            is_active=payload.set_active,
            status=payload.status or ("published" if payload.set_active else "draft"),
            created_at=utcnow(),
            fields=deep_copy(payload.fields),
        )
        self.state.passports.templates.append(template)
        if template.is_active:
            self._mark_active(template)
        logger.info("Created template %s v%d for %s", template.id, template.version, template.device_model_id)
        return template

    # PUBLIC_INTERFACE
    def set_template_active(self, template_id: str) -> PassportTemplate:
        """Make ``template_id`` the only active template of its device model; it is published."""
        template = self.get_template(template_id)
        self._mark_active(template)
        return template

    # PUBLIC_INTERFACE
    def save_template_from_passport(
        self, passport_id: str, name: str, description: Optional[str] = None, set_active: bool = False
    ) -> PassportTemplate:
        """Capture the field set of a passport as a new template version of its device model."""
        passport = self.get_passport(passport_id)
        if passport.device_id is None:
            raise DomainError(f"Passport {passport_id} is not linked to a device")
        device = self.get_device(passport.device_id)
        source = self.get_template(passport.template_id) if passport.template_id else None
        return self.create_template(
            PassportTemplateCreate(
                device_model_id=device.device_model_id,
                name=name,
                description=description,
                fields=source.fields if source else [],
                set_active=set_active,
            )
        )

    def _next_template_version(self, device_model_id: str) -> int:
        versions = [t.version for t in self.state.passports.templates if t.device_model_id == device_model_id]
        return max(versions) + 1 if versions else 1

    def _mark_active(self, active: PassportTemplate) -> None:
        for template in self.state.passports.templates:
            if template.device_model_id != active.device_model_id:
                continue
            template.is_active = template.id == active.id
            if template.is_active:
                template.status = "published"

    # Passport lifecycle

    # PUBLIC_INTERFACE
    def create_draft_passport(self, device_id: str, template_id: Optional[str] = None) -> ProductPassport:
        """
        Draft a new passport version for a device.

        Descriptive fields are copied from the device and its model. With a
        template, ``field_values`` start from the field defaults and are then
        auto-filled from the device where a field key names a device attribute.
        """
        device = self.get_device(device_id)
        template = self.get_template(template_id) if template_id else None
        model = self.find_device_model(device.device_model_id)
        now = utcnow()
        passport = ProductPassport(
            id=new_id("passport"),
            device_id=device.id,
            template_id=template.id if template else None,
            status="draft",
            version=self._next_passport_version(device.id),
            created_at=now,
            updated_at=now,
            asset_tag=device.asset_tag,
            model=model.name if model else UNKNOWN_MODEL,
            serial_number=device.serial_number,
            vendor=model.vendor if model else "",
            location=device.location,
            owner=device.owner,
            firmware="",
            ips=[device.ip_address] if device.ip_address else [],
            attachments=[],
            history=[ProductHistoryEntry(ts=now, action="draft", details="Passport draft created.", actor=DEFAULT_ACTOR)],
        )
        if template is not None:
            passport.field_values = self._initial_values(template.fields, device, passport)
        self.state.passports.passports.append(passport)
        logger.info("Drafted passport %s v%d for device %s", passport.id, passport.version, device.id)
        return passport

    # PUBLIC_INTERFACE
    def apply_template(self, passport_id: str, template_id: str) -> ProductPassport:
        """Re-shape a passport with a template; existing field values are replaced."""
        passport = self.get_passport(passport_id)
        template = self.get_template(template_id)
        device = self.get_device(passport.device_id) if passport.device_id else None
        passport.template_id = template.id
        passport.field_values = self._initial_values(template.fields, device, passport)
        self._touch(passport, "template", f"Applied template {template.name} v{template.version}.")
        return passport

    # PUBLIC_INTERFACE
    def update_metadata(self, passport_id: str, patch: PassportMetadataUpdate) -> ProductPassport:
        passport = self.get_passport(passport_id)
        for field, value in patch.model_dump(exclude_unset=True).items():
            setattr(passport, field, value)
        passport.updated_at = utcnow()
        return passport

    # PUBLIC_INTERFACE
    def update_values(self, passport_id: str, values: Dict[str, Any]) -> ProductPassport:
        """Merge ``values`` into the passport field values."""
        passport = self.get_passport(passport_id)
        passport.field_values = {**passport.field_values, **deep_copy(values)}
        passport.updated_at = utcnow()
        return passport

    # PUBLIC_INTERFACE
    def append_history(self, passport_id: str, entry: ProductHistoryEntry) -> ProductPassport:
        passport = self.get_passport(passport_id)
        passport.history.append(deep_copy(entry))
        return passport

    # PUBLIC_INTERFACE
    def add_attachment(self, passport_id: str, payload: AttachmentCreate) -> ProductPassport:
        passport = self.get_passport(passport_id)
        attachment = ProductPassportAttachment(
            id=new_id("attachment"), name=payload.name, url=payload.url, uploaded_at=utcnow()
        )
        passport.attachments = [*(passport.attachments or []), attachment]
        self._touch(passport, "attachment", f"Attachment {payload.name} added.")
        return passport

    # PUBLIC_INTERFACE
    def finalize_passport(self, passport_id: str, actor: str = DEFAULT_ACTOR) -> ProductPassport:
        passport = self.get_passport(passport_id)
        passport.status = "ready"
        self._touch(passport, "finalize", "Passport approved and marked ready.", actor=actor)
        logger.info("Finalized passport %s", passport.id)
        return passport

    def _touch(self, passport: ProductPassport, action: str, details: str, actor: str = DEFAULT_ACTOR) -> None:
        passport.updated_at = utcnow()
        passport.history.append(ProductHistoryEntry(ts=passport.updated_at, action=action, details=details, actor=actor))

    def _next_passport_version(self, device_id: str) -> int:
        versions = [p.version for p in self.state.passports.passports if p.device_id == device_id]
        return max(versions) + 1 if versions else 1

    @staticmethod
    def _initial_values(
        fields: List[PassportTemplateField], device: Optional[NetworkDevice], passport: ProductPassport
    ) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field in fields:
            if field.type == "table":
                values[field.key] = deep_copy(field.default_value) if isinstance(field.default_value, list) else []
                continue
            if field.default_value is not None:
                values[field.key] = deep_copy(field.default_value)
            elif field.key in _AUTOFILL_SOURCES:
                values[field.key] = getattr(passport, _AUTOFILL_SOURCES[field.key])
            elif device is not None and field.key in ("sku", "article"):
                values[field.key] = device.asset_tag
            elif device is not None and field.key == "ipAddress":
                values[field.key] = device.ip_address
        return values
