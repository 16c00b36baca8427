"""
Store serialisation: concurrent writers and readers against the shared state.

Each repository operation runs under the store lock, so any state a reader
observes must equal the seed with some whole operations replayed in journal
order, and no operation may be visible with only part of its moves.
"""

import asyncio
from collections import Counter

import pytest

from enterprise_ledger.repositories.erp import erp_repository
from enterprise_ledger.repositories.inventory import inventory_repository
from enterprise_ledger.repositories.mes import mes_repository
from enterprise_ledger.services.fulfillment import FulfillmentService
from enterprise_ledger.services.production import ProductionService
from enterprise_ledger.state import enterprise_store

pytestmark = pytest.mark.anyio

WAREHOUSE = "wh-main"

# ref_id of the journal entries -> the same operation applied serially to a state
SERIAL_OPERATIONS = {
    "po-2024-1045": lambda state: FulfillmentService(state, WAREHOUSE).receive_purchase_order("po-2024-1045"),
    "so-2024-202": lambda state: FulfillmentService(state, WAREHOUSE).ship_sales_order("so-2024-202"),
    "wo-router-10-1": lambda state: ProductionService(state, WAREHOUSE).complete_work_order("wo-router-10-1"),
    "wo-router-11-1": lambda state: ProductionService(state, WAREHOUSE).complete_work_order("wo-router-11-1"),
}


def _lot_balances(lots):
    return sorted((lot.item_id, lot.location_id, lot.qty, lot.status) for lot in lots)


async def _after_yields(count, operation):
    for _ in range(count):
        await asyncio.sleep(0)
    return await operation()


async def _read_lots_and_journal():
    return await inventory_repository.read(lambda state: (state.inventory.stock_lots, state.inventory.stock_moves))


def _new_moves(journal, seed_journal_len):
    """Moves added since the seed, oldest first."""
    return list(reversed(journal[: len(journal) - seed_journal_len]))


def _replay(ref_order):
    state = enterprise_store.seed()
    for ref_id in ref_order:
        SERIAL_OPERATIONS[ref_id](state)
    return state


class TestConcurrentOperations:
    async def _run_concurrently(self):
        writers = [
            _after_yields(3, lambda: erp_repository.receive_purchase_order("po-2024-1045")),
            _after_yields(1, lambda: erp_repository.ship_sales_order("so-2024-202")),
            _after_yields(2, lambda: mes_repository.complete_work_order("wo-router-10-1")),
            _after_yields(4, lambda: mes_repository.complete_work_order("wo-router-11-1")),
        ]
        readers = [_after_yields(i % 6, _read_lots_and_journal) for i in range(24)]
        results = await asyncio.gather(*writers, *readers)
        return results[len(writers):]

    async def test_every_read_sees_whole_operations_only(self):
        seed = enterprise_store.seed()
        seed_journal_len = len(seed.inventory.stock_moves)
        snapshots = await self._run_concurrently()

        final_lots, final_journal = await _read_lots_and_journal()
        moves_per_ref = Counter(move.ref_id for move in _new_moves(final_journal, seed_journal_len))
        assert set(moves_per_ref) == set(SERIAL_OPERATIONS)

        for lots, journal in snapshots:
            new_moves = _new_moves(journal, seed_journal_len)
            seen = Counter(move.ref_id for move in new_moves)
            for ref_id, count in seen.items():
                assert count == moves_per_ref[ref_id], f"{ref_id} observed half-applied"
            ref_order = list(dict.fromkeys(move.ref_id for move in new_moves))
            assert _lot_balances(lots) == _lot_balances(_replay(ref_order).inventory.stock_lots)

    async def test_final_state_matches_serial_replay_in_journal_order(self):
        seed_journal_len = len(enterprise_store.seed().inventory.stock_moves)
        await self._run_concurrently()

        lots, journal = await _read_lots_and_journal()
        ref_order = list(dict.fromkeys(move.ref_id for move in _new_moves(journal, seed_journal_len)))
        assert _lot_balances(lots) == _lot_balances(_replay(ref_order).inventory.stock_lots)
        assert len(journal) == len(_replay(ref_order).inventory.stock_moves)

    async def test_readers_get_isolated_copies(self):
        lots, _ = await _read_lots_and_journal()
        lots[0].qty = -1
        fresh, _ = await _read_lots_and_journal()
        assert fresh[0].qty != -1
