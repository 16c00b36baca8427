"""
Enterprise store: reset fidelity, copy isolation and seed content.
"""

import pytest

from enterprise_ledger.repositories.erp import erp_repository
from enterprise_ledger.repositories.inventory import inventory_repository
from enterprise_ledger.repositories.mes import mes_repository
from enterprise_ledger.repositories.tasks import tasks_repository
from enterprise_ledger.schemas.inventory import InventoryReceipt, Item, StockMoveCreate
from enterprise_ledger.schemas.tasks import TaskCreate
from enterprise_ledger.state import build_seed_state, enterprise_store, reset_enterprise_state
from enterprise_ledger.state.store import EnterpriseStore


class TestSeed:
    def test_seed_ids_are_literal(self):
        assert build_seed_state().model_dump() == enterprise_store.seed().model_dump()

    def test_seed_location_roles_are_bootstrapped_from_paths(self):
        roles = enterprise_store.seed().inventory.location_roles
        assert roles["wh-main"].raw == "loc-main-raw"
        assert roles["wh-main"].wip == "loc-main-wip"
        assert roles["wh-main"].fg == "loc-main-fg"
        assert roles["wh-eu"].raw is None
        assert roles["wh-eu"].fg == "loc-eu-fg"


@pytest.mark.anyio
class TestReset:
    async def test_reset_restores_every_domain(self):
        await inventory_repository.record_stock_move(
            StockMoveCreate(
                item_id="item-raw-001",
                qty=120,
                from_location_id="loc-main-raw",
                ref_type="Adjustment",
                ref_id="adj-1",
            )
        )
        await inventory_repository.upsert_item(
            Item(sku="NEW-1", name="New", uom="ea", type="raw", unit_cost=1)
        )
        await mes_repository.complete_work_order("wo-router-10-1")
        await erp_repository.receive_purchase_order("po-2024-1045")
        await tasks_repository.create_task(TaskCreate(title="Extra"))

        assert enterprise_store.snapshot().model_dump() != enterprise_store.seed().model_dump()
        reset_enterprise_state()
        assert enterprise_store.snapshot().model_dump() == enterprise_store.seed().model_dump()

    async def test_reset_discards_ledger_writes(self):
        lots_before = await inventory_repository.list_stock_lots()
        await inventory_repository.receive_inventory(
            InventoryReceipt(item_id="item-raw-001", qty=5, location_id="loc-main-raw", ref_type="Adjustment", ref_id="a")
        )
        reset_enterprise_state()
        assert [lot.qty for lot in lots_before] == [lot.qty for lot in await inventory_repository.list_stock_lots()]


@pytest.mark.anyio
class TestCopyIsolation:
    async def test_mutating_returned_lots_does_not_touch_store(self):
        lots = await inventory_repository.list_stock_lots()
        lots[0].qty = -1
        lots.clear()
        again = await inventory_repository.list_stock_lots()
        assert again[0].id == "lot-raw-001"
        assert again[0].qty == 120

    async def test_mutating_returned_work_order_does_not_touch_store(self):
        work_order = await mes_repository.start_work_order("wo-router-10-2")
        work_order.status = "blocked"
        stored = {w.id: w for w in await mes_repository.list_work_orders()}
        assert stored["wo-router-10-2"].status == "in-progress"

    async def test_upsert_argument_is_copied_in(self):
        item = Item(id="item-raw-001", sku="PCB-10", name="PCB", uom="ea", type="raw", unit_cost=90)
        await inventory_repository.upsert_item(item)
        item.name = "changed after upsert"
        stored = {i.id: i for i in await inventory_repository.list_items()}
        assert stored["item-raw-001"].name == "PCB"


class TestStoreConstruction:
    def test_private_seed_is_isolated_from_caller(self):
        seed = build_seed_state()
        store = EnterpriseStore(seed)
        seed.inventory.items.clear()
        store.reset()
        assert len(store.snapshot().inventory.items) == 4
