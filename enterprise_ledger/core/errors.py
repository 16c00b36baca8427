from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """
    Base class for failures raised by repository operations.

    Each subclass carries a machine-readable ``code`` next to the human-readable
    message, which is kept verbatim for callers that display it directly.
    """

    code: str = "domain_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """A referenced entity id does not exist in its collection."""

    code = "not_found"

    def __init__(self, entity_kind: str, entity_id: str, message: Optional[str] = None) -> None:
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        super().__init__(message or f"{entity_kind} {entity_id} not found")
