"""Application service (use case) for Message operations."""

from uuid import UUID

from noticeboard.application.interfaces import MessageStore
from noticeboard.application.schemas import MessageCreate, MessageUpdate
from noticeboard.domain import queries
from noticeboard.domain.entities import Message, Page
from noticeboard.domain.exceptions import EntityNotFoundError, InvalidIdentifierError


def parse_message_id(raw_id: str) -> UUID:
    """Parse a message id from a URL segment."""
    try:
        return UUID(raw_id)
    except ValueError as exc:
        raise InvalidIdentifierError("Message", raw_id) from exc


class MessageService:
    """Orchestrates message logic. Depends on the store port (DI)."""

    def __init__(self, store: MessageStore):
        self._store = store

    async def get_message(self, message_id: UUID) -> Message:
        message = await self._store.get_message(message_id)
        if message is None:
            raise EntityNotFoundError("Message", message_id)
        return message

    async def list_messages(self) -> list[Message]:
        """All stored messages, expired ones included, in display order."""
        return queries.order_by_priority(await self._store.get_all_messages())

    async def list_active_messages(self) -> list[Message]:
        return await self._store.get_active_messages()

    async def list_active_page(
        self, page: int | None = None, page_size: int | None = None
    ) -> Page[Message]:
        return await self._store.get_active_messages_page(page, page_size)

    async def create_message(self, data: MessageCreate) -> Message:
        return await self._store.create_message(
            title=data.title,
            content=data.content,
            author=data.author,
            priority=data.priority,
            expires_at=data.expires_at,
        )

    async def update_message(self, message_id: UUID, data: MessageUpdate) -> Message:
        message = await self._store.update_message(message_id, data.to_changes())
        if message is None:
            raise EntityNotFoundError("Message", message_id)
        return message

    async def toggle_message(self, message_id: UUID) -> Message:
        """Flip ``enabled`` in a single locked store operation."""
        message = await self._store.apply_to_message(
            message_id, lambda current: {"enabled": not current.enabled}
        )
        if message is None:
            raise EntityNotFoundError("Message", message_id)
        return message

    async def delete_message(self, message_id: UUID) -> bool:
        if not await self._store.delete_message(message_id):
            raise EntityNotFoundError("Message", message_id)
        return True
