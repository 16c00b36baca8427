from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pydantic import Field

from enterprise_ledger.core.ids import deep_copy
from enterprise_ledger.schemas.automation import AutomationState
from enterprise_ledger.schemas.common import EntityModel
from enterprise_ledger.schemas.erp import ErpState
from enterprise_ledger.schemas.inventory import InventoryState
from enterprise_ledger.schemas.passports import ProductPassportState
from enterprise_ledger.schemas.production import MesState
from enterprise_ledger.schemas.tasks import TaskState
from enterprise_ledger.schemas.workforce import WorkforceState

logger = logging.getLogger(__name__)

_DOMAINS = ("inventory", "mes", "erp", "tasks", "passports", "automation", "workforce")


class EnterpriseState(EntityModel):
    """Every domain sub-state of the dashboard, held as one snapshot."""
    inventory: InventoryState = Field(default_factory=InventoryState)
    mes: MesState = Field(default_factory=MesState)
    erp: ErpState = Field(default_factory=ErpState)
    tasks: TaskState = Field(default_factory=TaskState)
    passports: ProductPassportState = Field(default_factory=ProductPassportState)
    automation: AutomationState = Field(default_factory=AutomationState)
    workforce: WorkforceState = Field(default_factory=WorkforceState)


class EnterpriseStore:
    """
    Process-resident owner of the canonical enterprise state.

    The live state is only reachable through ``transaction()``, which serialises
    operations behind a single lock: one repository operation is one critical
    section, so readers see either the state before a ledger move or the state
    after it, never in between.
    """

    def __init__(self, seed: EnterpriseState) -> None:
        self._seed = deep_copy(seed)
        self._state = deep_copy(seed)
        self._lock = asyncio.Lock()

    # PUBLIC_INTERFACE
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[EnterpriseState]:
        """Hold the store lock and yield the live, mutable state."""
        async with self._lock:
            yield self._state

    # PUBLIC_INTERFACE
    def reset(self) -> None:
        """Replace every domain sub-state with a fresh copy of the seed snapshot."""
        snapshot = deep_copy(self._seed)
        for domain in _DOMAINS:
            setattr(self._state, domain, getattr(snapshot, domain))
        logger.info("Enterprise state reset to seed snapshot")

    def snapshot(self) -> EnterpriseState:
        """Deep copy of the whole live state."""
        return deep_copy(self._state)

    def seed(self) -> EnterpriseState:
        """Deep copy of the seed snapshot."""
        return deep_copy(self._seed)
