"""
Domain event base.

Events are immutable, past-tense records of a change to an aggregate
(``QuestionSessionFinished``). They are what listeners of a tracker
receive.
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime

from .entity import EntityId


@dataclass(frozen=True)
class DomainEvent:
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    @property
    def name(self) -> str:
        return type(self).__name__

    def log_context(self) -> dict[str, object]:
        """Event fields as plain values, for structured log lines."""
        context: dict[str, object] = {"event_name": self.name}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, EntityId):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            context[f.name] = value
        return context
