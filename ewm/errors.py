"""
Domain errors raised by the service layer.

Only two kinds exist: a referenced entity is missing, or a business rule
forbids the operation.  Both propagate unchanged to the HTTP layer, which
maps them to 404 and 409 respectively (see ``ewm.error_handlers``).
"""


class UserError(Exception):
    """Base class for errors whose message is safe to show to the caller."""


class EntityNotFoundError(UserError):
    """Raised when a referenced User, Event or Comment does not exist."""

    def __init__(self, entity: type | str, entity_id: int) -> None:
        self.entity = entity if isinstance(entity, str) else entity.__name__
        self.entity_id = entity_id
        super().__init__(f"{self.entity} with id={entity_id} was not found")


class OperationNotAllowedError(UserError):
    """Raised when an operation violates a business rule."""

    def __init__(self, message: str = "Operation is not allowed") -> None:
        super().__init__(message)
