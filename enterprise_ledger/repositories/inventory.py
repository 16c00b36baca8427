from __future__ import annotations

import logging
from typing import Dict, List, Optional

from enterprise_ledger.core.errors import NotFoundError
from enterprise_ledger.core.ids import deep_copy, round2
from enterprise_ledger.schemas.inventory import (
    Bom,
    InventoryReceipt,
    Item,
    ItemBalance,
    Location,
    LocationRoles,
    StockLot,
    StockMove,
    StockMoveCreate,
    Warehouse,
)
from enterprise_ledger.services.ledger import StockLedger
from enterprise_ledger.state import enterprise_store
from enterprise_ledger.state.store import EnterpriseStore
from .base import BaseRepository

logger = logging.getLogger(__name__)


class InventoryRepository(BaseRepository):
    """
    Repository for the stock ledger: item master data, locations, lots and the
    stock-move journal.
    """

    def __init__(self, store: EnterpriseStore) -> None:
        super().__init__(store)

    async def list_items(self) -> List[Item]:
        return await self.read(lambda state: state.inventory.items)

    async def list_boms(self) -> List[Bom]:
        return await self.read(lambda state: state.inventory.boms)

    async def list_warehouses(self) -> List[Warehouse]:
        return await self.read(lambda state: state.inventory.warehouses)

    async def list_locations(self) -> List[Location]:
        return await self.read(lambda state: state.inventory.locations)

    async def list_stock_lots(self) -> List[StockLot]:
        return await self.read(lambda state: state.inventory.stock_lots)

    async def list_stock_moves(self) -> List[StockMove]:
        """Stock moves, newest first."""
        return await self.read(lambda state: state.inventory.stock_moves)

    # PUBLIC_INTERFACE
    async def upsert_item(self, item: Item) -> Item:
        """Replace the item with the same id or append it (generating an id when missing)."""
        async with self.transaction() as state:
            stored = self.upsert(state.inventory.items, deep_copy(item), "item")
            return deep_copy(stored)

    # PUBLIC_INTERFACE
    async def upsert_bom(self, bom: Bom) -> Bom:
        async with self.transaction() as state:
            stored = self.upsert(state.inventory.boms, deep_copy(bom), "bom")
            return deep_copy(stored)

    # PUBLIC_INTERFACE
    async def upsert_location(self, location: Location) -> Location:
        async with self.transaction() as state:
            stored = self.upsert(state.inventory.locations, deep_copy(location), "loc")
            return deep_copy(stored)

    # PUBLIC_INTERFACE
    async def record_stock_move(self, payload: StockMoveCreate) -> StockMove:
        """
        Record a stock movement and adjust the affected lots.

        The absolute value of ``payload.qty`` is moved. Either side may be
        omitted; with neither side the move is only journaled.
        """
        async with self.transaction() as state:
            move = StockLedger(state).record_move(
                item_id=payload.item_id,
                qty=payload.qty,
                from_location_id=payload.from_location_id,
                to_location_id=payload.to_location_id,
                ref_type=payload.ref_type,
                ref_id=payload.ref_id,
                note=payload.note,
                status=payload.status,
            )
            return deep_copy(move)

    # PUBLIC_INTERFACE
    async def receive_inventory(self, payload: InventoryReceipt) -> StockLot:
        """Receive stock as ``available`` and return the resulting lot."""
        async with self.transaction() as state:
            lot = StockLedger(state).receive(
                item_id=payload.item_id,
                qty=payload.qty,
                location_id=payload.location_id,
                ref_type=payload.ref_type,
                ref_id=payload.ref_id,
                lot_no=payload.lot_no,
            )
            return deep_copy(lot)

    async def list_location_roles(self) -> Dict[str, LocationRoles]:
        return await self.read(lambda state: state.inventory.location_roles)

    # PUBLIC_INTERFACE
    async def set_location_roles(self, warehouse_id: str, roles: LocationRoles) -> LocationRoles:
        """Configure which locations of a warehouse act as raw, wip and fg."""
        async with self.transaction() as state:
            if not any(w.id == warehouse_id for w in state.inventory.warehouses):
                raise NotFoundError("Warehouse", warehouse_id)
            state.inventory.location_roles[warehouse_id] = deep_copy(roles)
            logger.info(
                "Location roles for %s: raw=%s wip=%s fg=%s", warehouse_id, roles.raw, roles.wip, roles.fg
            )
            return deep_copy(roles)

    # PUBLIC_INTERFACE
    async def get_item_balance(self, item_id: str, location_id: Optional[str] = None) -> ItemBalance:
        """Sum lot quantities of an item per location, optionally for one location only."""
        async with self.transaction() as state:
            by_location: Dict[str, float] = {}
            for lot in state.inventory.stock_lots:
                if lot.item_id != item_id:
                    continue
                if location_id and lot.location_id != location_id:
                    continue
                by_location[lot.location_id] = round2(by_location.get(lot.location_id, 0.0) + lot.qty)
            return ItemBalance(item_id=item_id, total=round2(sum(by_location.values())), by_location=by_location)


inventory_repository = InventoryRepository(enterprise_store)
