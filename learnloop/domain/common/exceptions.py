"""
Errors raised by domain entities and policies.

Nothing has been written when one of these is raised; the app's exception
handlers answer 404 for a missing entity and 400 for everything else.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """Rejected input such as empty post content or negative session XP."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """A valid request that a rule forbids, e.g. grading a quiz twice."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule
