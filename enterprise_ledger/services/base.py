from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enterprise_ledger.state.store import EnterpriseState


class BaseService:
    """
    Base class for services. Holds the live enterprise state for use across
    domain operations.

    Services keep business logic and orchestration; they must only be built
    inside a store transaction, which repositories open for them.
    """

    def __init__(self, state: EnterpriseState) -> None:
        self.state = state
