"""
Domain error types.

Every error raised by business rules and integrations derives from
``FleetDeskError`` so the server can map them to HTTP responses in one place.
"""

from __future__ import annotations

from typing import Iterable, List


class FleetDeskError(Exception):
    pass


class EntityNotFoundError(FleetDeskError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class BusinessRuleError(FleetDeskError):
    """A request is well-formed but violates a business rule."""

    def __init__(self, message: str, problems: Iterable[str] = ()) -> None:
        self.problems: List[str] = list(problems)
        super().__init__(message)


class LeaseRateError(BusinessRuleError):
    def __init__(self, contract_number: str) -> None:
        self.contract_number = contract_number
        super().__init__(f"No valid rate found for lease {contract_number}")


class NotificationError(FleetDeskError):
    pass


class NotificationNotConfiguredError(NotificationError):
    def __init__(self, channel: str, hint: str) -> None:
        self.channel = channel
        super().__init__(f"{channel} service not configured. {hint}")


class NotificationDeliveryError(NotificationError):
    def __init__(self, channel: str, details: str, status_code: int | None = None) -> None:
        self.channel = channel
        self.details = details
        self.status_code = status_code
        super().__init__(f"Failed to send {channel}: {details}")


class StorageError(FleetDeskError):
    pass
