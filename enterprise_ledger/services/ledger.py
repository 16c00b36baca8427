from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from enterprise_ledger.core.ids import new_id, round2, utcnow
from enterprise_ledger.schemas.inventory import (
    InventoryState,
    LotAdjustmentOutcome,
    StockLot,
    StockLotStatus,
    StockMove,
    StockMoveRefType,
)
from enterprise_ledger.services.base import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LotAdjustment:
    """Result of one lot quantity adjustment."""
    outcome: LotAdjustmentOutcome
    item_id: str
    location_id: str
    delta: float
    lot: Optional[StockLot] = None

    @property
    def ignored(self) -> bool:
        return self.outcome is LotAdjustmentOutcome.IGNORED


class StockLedger(BaseService):
    """
    Lot-quantity bookkeeping and the stock-move journal.

    A lot is the running balance of one item at one location; at most one lot
    exists per (item, location) pair. The move journal is append-only, newest
    entry first, and every physical quantity change goes through ``record_move``
    or ``receive``.
    """

    @property
    def inventory(self) -> InventoryState:
        return self.state.inventory

    def find_lot(self, item_id: str, location_id: str) -> Optional[StockLot]:
        for lot in self.inventory.stock_lots:
            if lot.item_id == item_id and lot.location_id == location_id:
                return lot
        return None

    # PUBLIC_INTERFACE
    def adjust_lot_quantity(
        self,
        item_id: str,
        location_id: str,
        delta: float,
        status: Optional[StockLotStatus] = None,
    ) -> LotAdjustment:
        """
        Apply ``delta`` to the lot of ``item_id`` at ``location_id``.

        Quantities never go below zero and are rounded to 2 decimals; a lot that
        reaches exactly zero becomes ``consumed`` whatever status was requested.
        Decrementing a lot that does not exist is ignored, not an error.
        """
        lot = self.find_lot(item_id, location_id)
        if lot is not None:
            lot.qty = round2(max(0.0, lot.qty + delta))
            if status:
                lot.status = status
            if lot.qty == 0:
                lot.status = "consumed"
            return LotAdjustment(LotAdjustmentOutcome.UPDATED, item_id, location_id, delta, lot)

        if delta <= 0:
            logger.warning(
                "Ignored adjustment of %s for item %s at %s: no stock lot exists",
                delta,
                item_id,
                location_id,
            )
            return LotAdjustment(LotAdjustmentOutcome.IGNORED, item_id, location_id, delta)

        lot = StockLot(
            id=new_id("lot"),
            item_id=item_id,
            location_id=location_id,
            lot_no=new_id("auto"),
            qty=round2(delta),
            status=status or "available",
        )
        self.inventory.stock_lots.append(lot)
        logger.info("Opened lot %s for item %s at %s", lot.id, item_id, location_id)
        return LotAdjustment(LotAdjustmentOutcome.CREATED, item_id, location_id, delta, lot)

    def _journal(self, move: StockMove) -> StockMove:
        self.inventory.stock_moves.insert(0, move)
        return move

    # PUBLIC_INTERFACE
    def record_move(
        self,
        *,
        item_id: str,
        qty: float,
        ref_type: StockMoveRefType,
        ref_id: str,
        from_location_id: Optional[str] = None,
        to_location_id: Optional[str] = None,
        note: Optional[str] = None,
        status: Optional[StockLotStatus] = None,
    ) -> StockMove:
        """
        Move ``abs(qty)`` of an item between zero, one or two locations and
        journal it. A missing side is skipped; a move with no side at all is
        a pure journal entry.
        """
        quantity = abs(qty)
        if from_location_id:
            self.adjust_lot_quantity(item_id, from_location_id, -quantity)
        if to_location_id:
            self.adjust_lot_quantity(item_id, to_location_id, quantity, status)
        move = self._journal(
            StockMove(
                id=new_id("stock-move"),
                item_id=item_id,
                qty=quantity,
                from_location_id=from_location_id,
                to_location_id=to_location_id,
                ref_type=ref_type,
                ref_id=ref_id,
                ts=utcnow(),
                note=note,
            )
        )
        logger.info(
            "Stock move %s: %s x %s %s -> %s (%s %s)",
            move.id,
            quantity,
            item_id,
            from_location_id or "-",
            to_location_id or "-",
            ref_type,
            ref_id,
        )
        return move

    # PUBLIC_INTERFACE
    def receive(
        self,
        *,
        item_id: str,
        qty: float,
        location_id: str,
        ref_type: StockMoveRefType,
        ref_id: str,
        lot_no: Optional[str] = None,
    ) -> StockLot:
        """
        Receive stock into a location as ``available`` and journal a "Receipt" move.

        ``lot_no`` overrides the lot number of the resulting lot. A non-positive
        receipt into a location without a lot opens an empty ``consumed`` lot.
        """
        adjustment = self.adjust_lot_quantity(item_id, location_id, qty, "available")
        lot = adjustment.lot
        if lot is None:
            lot = StockLot(
                id=new_id("lot"),
                item_id=item_id,
                location_id=location_id,
                lot_no=lot_no or new_id("receipt"),
                qty=0.0,
                status="consumed",
            )
            self.inventory.stock_lots.append(lot)
        elif lot_no:
            lot.lot_no = lot_no

        self._journal(
            StockMove(
                id=new_id("stock-move"),
                item_id=item_id,
                qty=abs(qty),
                to_location_id=location_id,
                ref_type=ref_type,
                ref_id=ref_id,
                ts=utcnow(),
                note="Receipt",
            )
        )
        logger.info("Received %s x %s into %s (%s %s)", qty, item_id, location_id, ref_type, ref_id)
        return lot
