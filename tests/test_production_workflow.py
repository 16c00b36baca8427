"""
Production workflow: work-order generation, execution and ledger effects.
"""

from datetime import datetime, timezone

import pytest

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.repositories.inventory import inventory_repository
from enterprise_ledger.repositories.mes import mes_repository
from enterprise_ledger.schemas.inventory import Bom, BomComponent, Item, LocationRoles
from enterprise_ledger.schemas.maintenance import MaintenanceLogCreate
from enterprise_ledger.schemas.production import OperationStep, ProductionOrderCreate, Routing
from enterprise_ledger.schemas.quality import NonconformanceCreate, QualityCheckCreate

pytestmark = pytest.mark.anyio

DUE = datetime(2026, 3, 1, tzinfo=timezone.utc)
RAW = "loc-main-raw"
WIP = "loc-main-wip"
FG = "loc-main-fg"


async def _two_step_product(bom_qty=2.0, order_qty=5.0, with_bom=True):
    """Item X built in two operations from component C; returns the new production order."""
    await inventory_repository.upsert_item(Item(id="X", sku="X", name="Widget", uom="ea", type="finished", unit_cost=10))
    await inventory_repository.upsert_item(Item(id="C", sku="C", name="Part", uom="ea", type="raw", unit_cost=1))
    if with_bom:
        await inventory_repository.upsert_bom(
            Bom(id="bom-x", item_id="X", components=[BomComponent(item_id="C", qty=bom_qty)])
        )
    await mes_repository.upsert_routing(
        Routing(
            id="routing-x",
            item_id="X",
            operations=[
                OperationStep(op_id="X-BUILD", seq=10, wc_id="wc-assembly", std_time_min=20),
                OperationStep(op_id="X-PACK", seq=20, wc_id="wc-pack", std_time_min=5),
            ],
        )
    )
    return await mes_repository.create_production_order(ProductionOrderCreate(item_id="X", qty=order_qty, due_date=DUE))


async def _order(prod_order_id):
    return next(o for o in await mes_repository.list_production_orders() if o.id == prod_order_id)


class TestGenerateWorkOrders:
    async def test_one_planned_work_order_per_operation(self):
        order = await _two_step_product()
        work_orders = await mes_repository.generate_work_orders(order.id)
        assert [w.op_id for w in work_orders] == ["X-BUILD", "X-PACK"]
        assert [w.wc_id for w in work_orders] == ["wc-assembly", "wc-pack"]
        assert all(w.status == "planned" for w in work_orders)
        assert all(w.id.startswith(f"wo-{order.id}-") for w in work_orders)

    async def test_repeated_generation_returns_same_ids(self):
        order = await _two_step_product()
        first = await mes_repository.generate_work_orders(order.id)
        second = await mes_repository.generate_work_orders(order.id)
        assert [w.id for w in first] == [w.id for w in second]
        assert len([w for w in await mes_repository.list_work_orders() if w.prod_order_id == order.id]) == 2

    async def test_count_mismatch_appends_a_full_set(self):
        # po-router-11 already owns one work order against a three-step routing
        generated = await mes_repository.generate_work_orders("po-router-11")
        assert len(generated) == 3
        owned = [w for w in await mes_repository.list_work_orders() if w.prod_order_id == "po-router-11"]
        assert len(owned) == 4

    async def test_unknown_production_order(self):
        with pytest.raises(NotFoundError, match="Production order po-missing not found"):
            await mes_repository.generate_work_orders("po-missing")

    async def test_missing_routing(self):
        order = await mes_repository.create_production_order(
            ProductionOrderCreate(item_id="item-raw-001", qty=1, due_date=DUE)
        )
        with pytest.raises(NotFoundError, match="Routing not found for item item-raw-001"):
            await mes_repository.generate_work_orders(order.id)


class TestProductionStatus:
    async def test_created_orders_start_as_draft(self):
        order = await mes_repository.create_production_order(ProductionOrderCreate(item_id="item-fin-001", qty=3, due_date=DUE))
        assert order.status == "draft"
        assert order.id.startswith("prod-")
        assert order.released_at is None

    async def test_release_timestamp_is_set_once(self):
        order = await mes_repository.create_production_order(ProductionOrderCreate(item_id="item-fin-001", qty=3, due_date=DUE))
        released = await mes_repository.update_production_status(order.id, "released")
        assert released.released_at is not None
        await mes_repository.update_production_status(order.id, "draft")
        again = await mes_repository.update_production_status(order.id, "released")
        assert again.released_at == released.released_at

    async def test_unknown_order(self):
        with pytest.raises(NotFoundError, match="Production order nope not found"):
            await mes_repository.update_production_status("nope", "closed")


class TestStartWorkOrder:
    async def test_start_sets_status_and_timestamp(self):
        work_order = await mes_repository.start_work_order("wo-router-11-1", "mila")
        assert work_order.status == "in-progress"
        assert work_order.assignee == "mila"
        assert work_order.started_at is not None

    async def test_start_without_assignee_keeps_existing(self):
        work_order = await mes_repository.start_work_order("wo-router-10-2")
        assert work_order.assignee == "mila"

    async def test_unknown_work_order(self):
        with pytest.raises(NotFoundError, match="Work order wo-missing not found"):
            await mes_repository.start_work_order("wo-missing")


class TestCompleteWorkOrder:
    async def test_first_operation_issues_components_raw_to_wip(self):
        order = await _two_step_product()
        build, _ = await mes_repository.generate_work_orders(order.id)

        completed = await mes_repository.complete_work_order(build.id)

        assert completed.status == "completed"
        assert completed.finished_at is not None
        move = (await inventory_repository.list_stock_moves())[0]
        assert (move.item_id, move.qty) == ("C", 10)
        assert (move.from_location_id, move.to_location_id) == (RAW, WIP)
        assert (move.ref_type, move.ref_id) == ("WorkOrder", build.id)
        assert move.note == "Issue components"
        assert (await _order(order.id)).status == "draft"

    async def test_last_operation_transfers_finished_goods_and_completes_order(self):
        order = await _two_step_product()
        build, pack = await mes_repository.generate_work_orders(order.id)
        await mes_repository.complete_work_order(build.id)

        await mes_repository.complete_work_order(pack.id)

        move = (await inventory_repository.list_stock_moves())[0]
        assert (move.item_id, move.qty) == ("X", 5)
        assert (move.from_location_id, move.to_location_id) == (WIP, FG)
        assert move.note == "Finished goods transfer"
        assert (await _order(order.id)).status == "completed"
        fg_lot = next(l for l in await inventory_repository.list_stock_lots() if l.item_id == "X" and l.location_id == FG)
        assert fg_lot.qty == 5
        assert fg_lot.status == "available"

    async def test_missing_bom_skips_component_issue(self):
        order = await _two_step_product(with_bom=False)
        build, _ = await mes_repository.generate_work_orders(order.id)
        moves_before = len(await inventory_repository.list_stock_moves())
        await mes_repository.complete_work_order(build.id)
        assert len(await inventory_repository.list_stock_moves()) == moves_before

    async def test_configured_roles_drive_locations(self):
        await inventory_repository.set_location_roles("wh-main", LocationRoles(raw=RAW, wip=FG, fg="loc-eu-fg"))
        order = await _two_step_product()
        build, pack = await mes_repository.generate_work_orders(order.id)
        await mes_repository.complete_work_order(build.id)
        await mes_repository.complete_work_order(pack.id)
        moves = await inventory_repository.list_stock_moves()
        assert (moves[1].from_location_id, moves[1].to_location_id) == (RAW, FG)
        assert (moves[0].from_location_id, moves[0].to_location_id) == (FG, "loc-eu-fg")

    async def test_cascade_waits_for_every_work_order(self):
        await mes_repository.complete_work_order("wo-router-10-1")
        assert (await _order("po-router-10")).status == "in-progress"
        await mes_repository.complete_work_order("wo-router-10-2")
        assert (await _order("po-router-10")).status == "completed"

    async def test_seed_first_operation_issues_router_bom(self):
        await mes_repository.complete_work_order("wo-router-10-1")
        lots = {(l.item_id, l.location_id): l for l in await inventory_repository.list_stock_lots()}
        assert lots[("item-raw-002", RAW)].qty == 2400
        assert lots[("item-raw-002", WIP)].qty == 100
        assert lots[("item-sub-001", WIP)].qty == 65
        assert ("item-sub-001", RAW) not in lots

    async def test_routing_without_matching_operation_still_completes(self):
        await mes_repository.upsert_routing(
            Routing(id="routing-router", item_id="item-fin-001",
                    operations=[OperationStep(op_id="OTHER", seq=10, wc_id="wc-test", std_time_min=1)])
        )
        moves_before = len(await inventory_repository.list_stock_moves())
        completed = await mes_repository.complete_work_order("wo-router-10-1")
        assert completed.status == "completed"
        assert len(await inventory_repository.list_stock_moves()) == moves_before

    async def test_unknown_work_order(self):
        with pytest.raises(NotFoundError, match="Work order wo-nope not found"):
            await mes_repository.complete_work_order("wo-nope")


class TestQualityAndMaintenance:
    async def test_record_quality_check(self):
        check = await mes_repository.record_quality_check(
            QualityCheckCreate(entity_type="WorkOrder", entity_id="wo-router-10-2", rule_id="qc-fct", status="passed")
        )
        assert check.id.startswith("qc-")
        assert len(await mes_repository.list_quality_checks()) == 2

    async def test_raise_nonconformance(self):
        record = await mes_repository.raise_nonconformance(
            NonconformanceCreate(ref_type="QualityCheck", ref_id="qc-wo-router-10-1", severity="high", status="open")
        )
        assert record.id.startswith("nc-")
        assert (await mes_repository.list_nonconformances())[-1].id == record.id

    async def test_append_maintenance_log(self):
        order = await mes_repository.append_maintenance_log(
            "mo-line1-01", MaintenanceLogCreate(ts=DUE, note="Replaced belt", actor="tech-1")
        )
        assert len(order.logs) == 2
        assert order.logs[-1].id.startswith("mo-log-")

    async def test_append_maintenance_log_unknown_order(self):
        with pytest.raises(NotFoundError, match="Maintenance order mo-x not found"):
            await mes_repository.append_maintenance_log("mo-x", MaintenanceLogCreate(ts=DUE, note="n", actor="a"))
