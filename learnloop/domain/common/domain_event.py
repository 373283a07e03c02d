"""Base class for events raised while progress is recorded."""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from uuid import UUID, uuid4

from .entity import EntityId


@dataclass(frozen=True)
class DomainEvent:
    """
    Immutable record of something that already happened, named in past tense.

    Subclasses declare their fields with ``kw_only=True`` so they can follow
    the defaulted ``event_id`` and ``occurred_at``.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_log_fields(self) -> dict[str, object]:
        """Flatten the event into structlog key/value pairs."""
        result: dict[str, object] = {"event_type": self.event_type}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, UUID):
                value = str(value)
            elif isinstance(value, EntityId):
                value = value.value
            result[f.name] = value
        return result

