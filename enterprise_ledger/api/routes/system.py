from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from enterprise_ledger.core.deps import get_store, require_state_reset_enabled
from enterprise_ledger.schemas.common import MessageResponse
from enterprise_ledger.state.store import EnterpriseStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["System"])


# PUBLIC_INTERFACE
@router.post(
    "/reset",
    response_model=MessageResponse,
    summary="Reset enterprise state",
    description="Restore every domain to the seed snapshot. Requires ENABLE_STATE_RESET.",
    dependencies=[Depends(require_state_reset_enabled)],
)
async def reset_state(store: EnterpriseStore = Depends(get_store)) -> MessageResponse:
    """
    Reset the in-memory state to its seed snapshot.

    Returns:
        MessageResponse: Confirmation message.
    """
    async with store.transaction():
        store.reset()
    return MessageResponse(message="State reset to seed snapshot")
