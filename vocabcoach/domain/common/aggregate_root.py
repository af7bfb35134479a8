"""
Aggregate root base.

The root is the only way into its aggregate. It checks the aggregate's
rules on every change and records each change as a domain event, which
the application layer drains and forwards to listeners.
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Return the events recorded since the last call and forget them."""
        events, self._events = self._events, []
        return events
