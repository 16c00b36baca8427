from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, model_validator

from .common import EntityModel

PassportStatus = Literal["draft", "ready"]
TemplateStatus = Literal["draft", "published"]
TemplateFieldType = Literal["text", "multiline", "number", "date", "select", "table"]
HistoryAction = Literal[
    "install", "move", "replacePart", "updateFirmware", "audit",
    "draft", "template", "attachment", "finalize",
]


class ProductHistoryEntry(EntityModel):
    ts: datetime
    action: HistoryAction
    details: str
    actor: str


class ProductPassportAttachment(EntityModel):
    id: str
    name: str
    url: str
    uploaded_at: Optional[datetime] = None


class AttachmentCreate(EntityModel):
    name: str
    url: str


class ProductPassport(EntityModel):
    """
    Lifecycle record of one deployed device.

    Passports start as a ``draft`` built from a device (and optionally a
    template) and become ``ready`` once finalized. ``field_values`` holds the
    template-driven values keyed by template field key.
    """
    id: str
    asset_tag: str
    model: str
    serial_number: str
    vendor: str
    location: str
    owner: str
    firmware: str
    macs: List[str] = Field(default_factory=list)
    ips: List[str] = Field(default_factory=list)
    warranty_until: Optional[datetime] = None
    certificates: Optional[List[str]] = None
    custom_fields: Optional[Dict[str, str]] = None
    history: List[ProductHistoryEntry] = Field(default_factory=list)
    attachments: Optional[List[ProductPassportAttachment]] = None
    device_id: Optional[str] = None
    template_id: Optional[str] = None
    status: PassportStatus = "ready"
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    field_values: Dict[str, Any] = Field(default_factory=dict)


class PassportMetadataUpdate(EntityModel):
    """Partial update of the descriptive passport fields; none of them may be cleared."""
    asset_tag: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    vendor: Optional[str] = None
    location: Optional[str] = None
    owner: Optional[str] = None
    firmware: Optional[str] = None
    macs: Optional[List[str]] = None
    ips: Optional[List[str]] = None

    @model_validator(mode="after")
    def _reject_nulls(self) -> "PassportMetadataUpdate":
        nulled = sorted(field for field in self.model_fields_set if getattr(self, field) is None)
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class DraftPassportCreate(EntityModel):
    device_id: str
    template_id: Optional[str] = None


class PassportFinalize(EntityModel):
    actor: str = "dev-admin"


class TemplateFromPassport(EntityModel):
    name: str
    description: Optional[str] = None
    set_active: bool = False


class DeviceModel(EntityModel):
    id: str
    vendor: str
    name: str
    description: Optional[str] = None


class DeviceModelCreate(EntityModel):
    vendor: str
    name: str
    description: Optional[str] = None


class NetworkDeviceCreate(EntityModel):
    asset_tag: str
    device_model_id: str
    serial_number: str
    ip_address: str = ""
    location: str = ""
    owner: str = ""
    status: str = "in_service"


class NetworkDevice(NetworkDeviceCreate):
    id: str


class NetworkDeviceRegistration(NetworkDeviceCreate):
    history_note: Optional[str] = None


class NetworkDeviceUpdate(EntityModel):
    asset_tag: Optional[str] = None
    device_model_id: Optional[str] = None
    serial_number: Optional[str] = None
    ip_address: Optional[str] = None
    location: Optional[str] = None
    owner: Optional[str] = None
    status: Optional[str] = None


class DeviceSearch(EntityModel):
    """Device filters; text filters match case-insensitive substrings, the rest match exactly."""
    asset_tag: Optional[str] = None
    device_model_id: Optional[str] = None
    serial_number: Optional[str] = None
    ip_address: Optional[str] = None
    status: Optional[str] = None


class DeviceHistoryCreate(EntityModel):
    ts: datetime
    action: str
    details: str
    actor: str


class DeviceHistoryEntry(DeviceHistoryCreate):
    id: str
    device_id: str


class TemplateFieldOption(EntityModel):
    label: str
    value: str


class PassportTemplateField(EntityModel):
    id: str
    key: str
    label: str
    type: TemplateFieldType
    required: bool = False
    default_value: Optional[Any] = None
    options: Optional[List[TemplateFieldOption]] = None


class PassportTemplateCreate(EntityModel):
    device_model_id: str
    name: str
    description: Optional[str] = None
    fields: List[PassportTemplateField] = Field(default_factory=list)
    status: Optional[TemplateStatus] = None
    set_active: bool = False


class PassportTemplate(EntityModel):
    """Versioned field set for a device model; at most one version per model is active."""
    id: str
    device_model_id: str
    name: str
    description: Optional[str] = None
    version: int
    is_active: bool = False
    status: TemplateStatus = "draft"
    created_at: datetime
    fields: List[PassportTemplateField] = Field(default_factory=list)


class ProductPassportState(EntityModel):
    passports: List[ProductPassport] = Field(default_factory=list)
    devices: List[NetworkDevice] = Field(default_factory=list)
    device_models: List[DeviceModel] = Field(default_factory=list)
    templates: List[PassportTemplate] = Field(default_factory=list)
    device_history: Dict[str, List[DeviceHistoryEntry]] = Field(default_factory=dict)
