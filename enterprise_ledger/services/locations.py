from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from enterprise_ledger.schemas.inventory import InventoryState, Location, LocationRoles

logger = logging.getLogger(__name__)

ROLES = ("raw", "wip", "fg")


def _match_path(locations: Iterable[Location], hint: str) -> Optional[str]:
    for location in locations:
        if hint in location.path.lower():
            return location.id
    return None


# PUBLIC_INTERFACE
def infer_location_roles(locations: List[Location], warehouse_id: str) -> LocationRoles:
    """
    Guess raw/wip/fg locations of a warehouse from their path naming.

    Only used to bootstrap role mappings for seed data.
    """
    own = [loc for loc in locations if loc.warehouse_id == warehouse_id]
    return LocationRoles(**{role: _match_path(own, role) for role in ROLES})


# PUBLIC_INTERFACE
def resolve_default_locations(inventory: InventoryState, warehouse_id: Optional[str]) -> LocationRoles:
    """
    Resolve the raw/wip/fg locations used by production and fulfillment.

    Resolution order per role:
      1. the configured mapping for ``warehouse_id`` (if the location still exists)
      2. the first location of ``warehouse_id`` whose path contains the role name
      3. the first location of any warehouse whose path contains the role name
      4. the first configured location, so moves are never silently dropped
    """
    known_ids = {loc.id for loc in inventory.locations}
    configured = inventory.location_roles.get(warehouse_id) if warehouse_id else None
    own = [loc for loc in inventory.locations if loc.warehouse_id == warehouse_id]
    first = inventory.locations[0].id if inventory.locations else None

    resolved = {}
    for role in ROLES:
        location_id = getattr(configured, role) if configured else None
        if location_id not in known_ids:
            location_id = _match_path(own, role) or _match_path(inventory.locations, role)
            if location_id is None:
                location_id = first
                if first is not None:
                    logger.debug("No '%s' location configured or matched; falling back to %s", role, first)
            elif not any(loc.id == location_id for loc in own) and warehouse_id:
                logger.warning(
                    "No '%s' location in warehouse %s; using %s from another warehouse", role, warehouse_id, location_id
                )
        resolved[role] = location_id
    return LocationRoles(**resolved)
