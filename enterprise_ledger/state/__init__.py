"""
State package exposing the process-wide enterprise store and its seed snapshot.
"""

from .seed import SEED_REFERENCE_TIME, build_seed_state
from .store import EnterpriseState, EnterpriseStore

enterprise_store = EnterpriseStore(build_seed_state())


# PUBLIC_INTERFACE
def reset_enterprise_state() -> None:
    """Restore the process-wide store to the seed snapshot."""
    enterprise_store.reset()


__all__ = [
    "EnterpriseState",
    "EnterpriseStore",
    "SEED_REFERENCE_TIME",
    "build_seed_state",
    "enterprise_store",
    "reset_enterprise_state",
]
