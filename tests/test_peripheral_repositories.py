"""
Tasks, automation, passports and workforce façades.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.repositories.automation import automation_repository
from enterprise_ledger.repositories.passports import passport_repository
from enterprise_ledger.repositories.tasks import tasks_repository
from enterprise_ledger.repositories.workforce import workforce_repository
from enterprise_ledger.schemas.passports import (
    AttachmentCreate,
    DeviceHistoryCreate,
    DeviceModelCreate,
    DeviceSearch,
    NetworkDeviceRegistration,
    NetworkDeviceUpdate,
    PassportMetadataUpdate,
    PassportTemplateCreate,
    ProductHistoryEntry,
)
from enterprise_ledger.schemas.tasks import TaskCreate, TaskUpdate, TimesheetCreate

pytestmark = pytest.mark.anyio

TS = datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)


class TestTasks:
    async def test_move_task(self):
        task = await tasks_repository.move_task("task-002", "done")
        assert task.status == "done"

    async def test_update_task_applies_only_given_fields(self):
        task = await tasks_repository.update_task("task-001", TaskUpdate(priority="critical"))
        assert task.priority == "critical"
        assert task.title == "Validate PO-2024-1045 delivery"
        assert task.assignee == "olga"

    async def test_update_task_rejects_null_required_field(self):
        with pytest.raises(ValidationError, match="title"):
            TaskUpdate(title=None)
        task = next(t for t in await tasks_repository.list_tasks() if t.id == "task-001")
        assert task.title == "Validate PO-2024-1045 delivery"

    async def test_update_task_revalidates_merged_task(self):
        with pytest.raises(ValidationError):
            await tasks_repository.update_task("task-001", TaskUpdate.model_construct(priority="urgent"))
        task = next(t for t in await tasks_repository.list_tasks() if t.id == "task-001")
        assert task.priority != "urgent"

    async def test_create_task_and_log_time(self):
        task = await tasks_repository.create_task(TaskCreate(title="Label reprint", tags=["warehouse"]))
        entry = await tasks_repository.log_time(
            TimesheetCreate(user_id="olga", entity_type="Task", entity_id=task.id, hours=0.5, ts=TS)
        )
        assert task.status == "backlog"
        assert len(await tasks_repository.list_tasks()) == 4
        assert (await tasks_repository.list_timesheets())[-1].id == entry.id

    async def test_unknown_task(self):
        with pytest.raises(NotFoundError, match="Task task-999 not found"):
            await tasks_repository.move_task("task-999", "todo")

    async def test_board_reference_data(self):
        assert [c.status for c in await tasks_repository.list_columns()] == [
            "backlog", "todo", "in-progress", "review", "done",
        ]
        assert len(await tasks_repository.list_sprints()) == 2


class TestAutomation:
    async def test_trigger_prepends_completed_run(self):
        run = await automation_repository.trigger_playbook("playbook-receiving", "olga")
        runs = await automation_repository.list_runs()
        assert runs[0].id == run.id
        assert run.status == "completed"
        assert run.run_by == "olga"
        assert run.output == "Executed 3 steps."

    async def test_dry_run_output(self):
        run = await automation_repository.trigger_playbook("playbook-release-order", "bot", dry_run=True)
        assert run.dry_run is True
        assert run.output == "Executed 2 steps in dry-run mode."

    async def test_unknown_playbook(self):
        with pytest.raises(NotFoundError, match="Playbook pb-x not found"):
            await automation_repository.trigger_playbook("pb-x", "olga")

    async def test_templates(self):
        assert {t.id for t in await automation_repository.list_templates()} == {
            "playbook-receiving", "playbook-release-order",
        }


class TestPassports:
    async def test_append_history(self):
        passport = await passport_repository.append_history(
            "pp-router-0001",
            ProductHistoryEntry(ts=TS, action="audit", details="Annual audit", actor="auditor"),
        )
        assert passport.history[-1].details == "Annual audit"
        assert len((await passport_repository.get_passport("pp-router-0001")).history) == 3

    async def test_add_attachment_stamps_upload_and_history(self):
        before = await passport_repository.get_passport("pp-router-0001")
        passport = await passport_repository.add_attachment(
            "pp-router-0001", AttachmentCreate(name="Audit.pdf", url="/files/audit.pdf")
        )
        assert [a.name for a in passport.attachments] == ["Router datasheet.pdf", "Audit.pdf"]
        assert passport.attachments[-1].id.startswith("attachment-")
        assert passport.attachments[-1].uploaded_at is not None
        assert len(passport.history) == len(before.history) + 1
        assert passport.history[-1].action == "attachment"
        assert passport.history[-1].details == "Attachment Audit.pdf added."
        assert passport.updated_at > before.updated_at

    async def test_unknown_passport(self):
        with pytest.raises(NotFoundError, match="Passport pp-x not found"):
            await passport_repository.get_passport("pp-x")

    async def test_unknown_passport_on_attachment(self):
        with pytest.raises(NotFoundError, match="Passport pp-x not found"):
            await passport_repository.add_attachment("pp-x", AttachmentCreate(name="a", url="/a"))


class TestPassportLifecycle:
    async def test_draft_copies_device_and_autofills_template(self):
        draft = await passport_repository.create_draft_passport("device-ast-1005", "tpl-router-base-v1")
        assert draft.id.startswith("passport-")
        assert draft.status == "draft"
        assert draft.version == 2
        assert (draft.asset_tag, draft.model, draft.vendor) == ("AST-1005", "Edge Router 1U", "NetGrip Manufacturing")
        assert draft.ips == ["10.0.10.55"]
        assert draft.field_values == {"role": "Edge router", "serialNumber": "ER1U-24-1005"}
        assert [h.action for h in draft.history] == ["draft"]
        assert (await passport_repository.get_draft_passport("device-ast-1005")).id == draft.id

    async def test_draft_without_template_has_no_values(self):
        draft = await passport_repository.create_draft_passport("device-ast-1042")
        assert draft.version == 1
        assert draft.template_id is None
        assert draft.field_values == {}
        assert draft.model == "Dell PowerEdge R650"

    async def test_draft_for_unknown_device_or_template(self):
        with pytest.raises(NotFoundError, match="Device device-x not found"):
            await passport_repository.create_draft_passport("device-x")
        with pytest.raises(NotFoundError, match="Template tpl-x not found"):
            await passport_repository.create_draft_passport("device-ast-1005", "tpl-x")
        assert len(await passport_repository.list_passports()) == 1

    async def test_edit_and_finalize(self):
        draft = await passport_repository.create_draft_passport("device-ast-1042", "tpl-server-base-v1")
        assert draft.field_values == {"osVersion": "ESXi 8.0", "ramGb": 256, "owner": "virtualization-team"}

        await passport_repository.update_passport_metadata(draft.id, PassportMetadataUpdate(firmware="2.1.3"))
        await passport_repository.update_passport_values(draft.id, {"ramGb": 512, "hypervisorCluster": "east-a"})
        ready = await passport_repository.finalize_passport(draft.id, actor="cto-office")

        assert ready.status == "ready"
        assert ready.firmware == "2.1.3"
        assert ready.field_values["ramGb"] == 512
        assert ready.field_values["osVersion"] == "ESXi 8.0"
        assert ready.history[-1].action == "finalize"
        assert ready.history[-1].actor == "cto-office"
        assert await passport_repository.get_draft_passport("device-ast-1042") is None

    async def test_metadata_patch_cannot_clear_fields(self):
        with pytest.raises(ValidationError, match="model"):
            PassportMetadataUpdate(model=None)

    async def test_apply_template_replaces_values_and_records_history(self):
        draft = await passport_repository.create_draft_passport("device-ast-1005")
        passport = await passport_repository.apply_template(draft.id, "tpl-router-base-v1")
        assert passport.template_id == "tpl-router-base-v1"
        assert passport.field_values["role"] == "Edge router"
        assert passport.history[-1].details == "Applied template Edge Router 1U passport v1."

    async def test_finalize_unknown_passport(self):
        with pytest.raises(NotFoundError, match="Passport pp-x not found"):
            await passport_repository.finalize_passport("pp-x")


class TestPassportTemplates:
    async def test_set_template_active_is_exclusive_per_model(self):
        created = await passport_repository.create_template(
            PassportTemplateCreate(device_model_id="model-edge-router-1u", name="Router v2")
        )
        assert created.version == 2
        assert created.is_active is False
        assert created.status == "draft"

        await passport_repository.set_template_active(created.id)
        router_templates = await passport_repository.list_templates("model-edge-router-1u")
        assert {t.id: t.is_active for t in router_templates} == {"tpl-router-base-v1": False, created.id: True}
        assert (await passport_repository.get_template(created.id)).status == "published"
        assert (await passport_repository.get_active_template("model-dell-r650")).id == "tpl-server-base-v1"

    async def test_create_active_template_deactivates_previous(self):
        created = await passport_repository.create_template(
            PassportTemplateCreate(device_model_id="model-dell-r650", name="R650 v2", set_active=True)
        )
        assert created.status == "published"
        assert (await passport_repository.get_active_template("model-dell-r650")).id == created.id

    async def test_set_unknown_template_active(self):
        with pytest.raises(NotFoundError, match="Template tpl-x not found"):
            await passport_repository.set_template_active("tpl-x")

    async def test_save_template_from_passport(self):
        template = await passport_repository.save_template_from_passport("pp-router-0001", "Router field copy")
        assert template.device_model_id == "model-edge-router-1u"
        assert template.version == 2
        assert [f.key for f in template.fields] == ["role", "installDate", "serialNumber", "powerProfile", "notes"]


class TestDevices:
    async def test_register_device_records_history(self):
        device = await passport_repository.create_device(
            NetworkDeviceRegistration(
                asset_tag="AST-2001", device_model_id="model-dell-r650", serial_number="R650-2001", history_note="Bulk import"
            )
        )
        history = await passport_repository.get_device_history(device.id)
        assert device.id.startswith("device-")
        assert [h.details for h in history] == ["Bulk import"]

    async def test_device_history_is_newest_first(self):
        entry = await passport_repository.append_device_history(
            "device-ast-1005", DeviceHistoryCreate(ts=TS, action="Audit", details="Rack audit", actor="auditor")
        )
        history = await passport_repository.get_device_history("device-ast-1005")
        assert history[0].id == entry.id
        assert len(history) == 3
        assert await passport_repository.get_device_history("device-none") == []

    async def test_search_and_query(self):
        assert [d.id for d in await passport_repository.list_devices("contractor")] == ["device-ast-1042"]
        assert len(await passport_repository.list_devices()) == 2
        found = await passport_repository.search_devices(DeviceSearch(asset_tag="ast-10", status="in_service"))
        assert [d.id for d in found] == ["device-ast-1005"]

    async def test_update_unknown_device(self):
        with pytest.raises(NotFoundError, match="Device device-x not found"):
            await passport_repository.update_device("device-x", NetworkDeviceUpdate(status="retired"))

    async def test_device_models(self):
        model = await passport_repository.create_device_model(DeviceModelCreate(vendor="Juniper", name="SRX340"))
        assert model.id.startswith("device-model-")
        assert len(await passport_repository.list_device_models()) == 3


class TestWorkforce:
    async def test_lists(self):
        assert [t.id for t in await workforce_repository.list_teams()] == ["team-assembly", "team-quality"]
        assert [m.id for m in await workforce_repository.list_members()] == ["alexei", "mila"]
        assert len(await workforce_repository.list_assignments()) == 2
        assert len(await workforce_repository.list_utilization()) == 2
        assert len(await workforce_repository.list_performance()) == 2
        assert (await workforce_repository.list_reports())[0].id == "wf-report-weekly"
