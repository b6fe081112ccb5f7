"""Domain entity: a notice board message with priority and optional expiry."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Priority(str, Enum):
    """Message priority, serialized in lowercase."""

    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank: 1 is the most important."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.URGENT: 1,
    Priority.HIGH: 2,
    Priority.NORMAL: 3,
    Priority.LOW: 4,
}


def as_utc(value: datetime) -> datetime:
    """Express ``value`` in UTC. Naive timestamps are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Message:
    """Core domain entity for a posted notice.

    ``enabled`` lets authors hide a notice without deleting it; messages
    persisted before the flag existed are loaded as enabled.
    """

    title: str
    content: str
    author: str
    priority: Priority = Priority.NORMAL
    expires_at: datetime | None = None
    enabled: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        now: datetime,
        title: str | None = None,
        content: str | None = None,
        author: str | None = None,
        priority: Priority | None = None,
        expires_at: datetime | None = ...,  # type: ignore[assignment]
        enabled: bool | None = None,
    ) -> None:
        """Apply the given fields and stamp updated_at with ``now``.

        ``expires_at`` uses ``...`` as "not given" so that ``None`` clears it.
        """
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if author is not None:
            self.author = author
        if priority is not None:
            self.priority = Priority(priority)
        if expires_at is not ...:
            self.expires_at = expires_at
        if enabled is not None:
            self.enabled = enabled
        self.updated_at = now

    def is_active(self, now: datetime) -> bool:
        """True while the message has no expiry or its expiry is still ahead."""
        return self.expires_at is None or self.expires_at > now
