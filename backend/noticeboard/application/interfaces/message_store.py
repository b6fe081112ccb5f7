"""Abstract store interface (port) for the notice board snapshot."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from noticeboard.domain.entities import ClientStatus, DataStats, Message, Page, Priority

MessageTransform = Callable[[Message], Mapping[str, Any]]


class MessageStore(ABC):
    """Port for message and client persistence: implemented in the infrastructure layer.

    Every returned entity is a copy; mutating it never touches stored state.
    """

    # ── Messages ────────────────────────────────────────────────────

    @abstractmethod
    async def create_message(
        self,
        *,
        title: str,
        content: str,
        author: str,
        priority: Priority,
        expires_at: datetime | None = None,
    ) -> Message:
        """Stamp, store and persist a new message."""
        ...

    @abstractmethod
    async def get_message(self, message_id: UUID) -> Message | None:
        """Retrieve a single message, expired or not."""
        ...

    @abstractmethod
    async def get_all_messages(self) -> list[Message]:
        """Every stored message, unfiltered and unsorted."""
        ...

    @abstractmethod
    async def get_active_messages(self) -> list[Message]:
        """Unexpired messages ordered by priority, then newest first."""
        ...

    @abstractmethod
    async def get_active_messages_page(
        self, page: int | None = None, page_size: int | None = None
    ) -> Page[Message]:
        """One page of the ordered active messages."""
        ...

    @abstractmethod
    async def update_message(
        self, message_id: UUID, changes: Mapping[str, Any]
    ) -> Message | None:
        """Apply a partial update. Returns None if the id is unknown."""
        ...

    @abstractmethod
    async def apply_to_message(
        self, message_id: UUID, transform: MessageTransform
    ) -> Message | None:
        """Compute changes from the current message and apply them atomically."""
        ...

    @abstractmethod
    async def delete_message(self, message_id: UUID) -> bool:
        """Delete a message. Returns True if deleted, False if not found."""
        ...

    # ── Clients ─────────────────────────────────────────────────────

    @abstractmethod
    async def update_client_status(self, status: ClientStatus) -> None:
        """Insert or fully replace a client record."""
        ...

    @abstractmethod
    async def mark_client_offline(self, client_id: str) -> None:
        """Flag a known client offline. Unknown ids are ignored."""
        ...

    @abstractmethod
    async def get_clients(self) -> list[ClientStatus]:
        ...

    @abstractmethod
    async def get_online_clients(self) -> list[ClientStatus]:
        ...

    # ── Stats ───────────────────────────────────────────────────────

    @abstractmethod
    async def get_stats(self) -> DataStats:
        ...
