"""Domain entity for connected-client presence."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ClientStatus:
    """Presence record of a single client, keyed by a caller-supplied id."""

    id: str
    name: str
    last_seen: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_online: bool = True
    ip_address: str | None = None
    device_info: str | None = None

    def mark_offline(self, now: datetime) -> None:
        self.is_online = False
        self.last_seen = now
