"""
Public Pydantic schemas used by repositories, FastAPI routes, and tests.

Schemas are grouped by domain module (inventory, production, erp, etc.) and
share the camelCase wire format defined by ``EntityModel``.
"""

from .common import MessageResponse  # noqa: F401
