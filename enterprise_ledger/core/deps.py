from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status

from enterprise_ledger.core.settings import AppSettings, get_app_settings
from enterprise_ledger.repositories.automation import AutomationRepository, automation_repository
from enterprise_ledger.repositories.erp import ErpRepository, erp_repository
from enterprise_ledger.repositories.inventory import InventoryRepository, inventory_repository
from enterprise_ledger.repositories.mes import MesRepository, mes_repository
from enterprise_ledger.repositories.passports import ProductPassportRepository, passport_repository
from enterprise_ledger.repositories.tasks import TasksRepository, tasks_repository
from enterprise_ledger.repositories.workforce import WorkforceRepository, workforce_repository
from enterprise_ledger.state.store import EnterpriseStore

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_settings() -> AppSettings:
    """Application settings dependency (override in tests to change behaviour)."""
    return get_app_settings()


# PUBLIC_INTERFACE
def get_inventory_repository() -> InventoryRepository:
    return inventory_repository


# PUBLIC_INTERFACE
def get_mes_repository() -> MesRepository:
    return mes_repository


# PUBLIC_INTERFACE
def get_erp_repository() -> ErpRepository:
    return erp_repository


# PUBLIC_INTERFACE
def get_tasks_repository() -> TasksRepository:
    return tasks_repository


# PUBLIC_INTERFACE
def get_automation_repository() -> AutomationRepository:
    return automation_repository


# PUBLIC_INTERFACE
def get_passport_repository() -> ProductPassportRepository:
    return passport_repository


# PUBLIC_INTERFACE
def get_workforce_repository() -> WorkforceRepository:
    return workforce_repository


# PUBLIC_INTERFACE
def get_store(repo: InventoryRepository = Depends(get_inventory_repository)) -> EnterpriseStore:
    """The store behind the repositories."""
    return repo.store


# PUBLIC_INTERFACE
def require_state_reset_enabled(settings: AppSettings = Depends(get_settings)) -> bool:
    """
    Gate for destructive system operations.

    Raises:
        HTTPException: 403 Forbidden unless ENABLE_STATE_RESET is set.
    """
    if not settings.ENABLE_STATE_RESET:
        logger.warning("State reset requested while ENABLE_STATE_RESET is disabled")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="State reset is disabled. Set ENABLE_STATE_RESET=true to enable it.",
        )
    return True
