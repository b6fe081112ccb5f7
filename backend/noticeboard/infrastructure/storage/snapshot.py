"""On-disk snapshot schema: pydantic models mirroring ``data.json``.

Layout::

    {
      "messages": {"<uuid>": {...message...}},
      "clients": {"<client id>": {...client status...}},
      "last_updated": "2025-01-01T00:00:00Z"
    }
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field

from noticeboard.domain.entities import ClientStatus, Message, Priority, as_utc

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MessageDocument(BaseModel):
    id: UUID
    title: str
    content: str
    author: str
    created_at: datetime
    updated_at: datetime
    priority: Priority
    expires_at: datetime | None = None
    # Older snapshots were written without the flag.
    enabled: bool = True


class ClientStatusDocument(BaseModel):
    id: str
    name: str
    last_seen: datetime
    is_online: bool
    ip_address: str | None = None
    device_info: str | None = None


class SnapshotDocument(BaseModel):
    """The whole persisted store: written and read as one unit."""

    messages: dict[UUID, MessageDocument] = Field(default_factory=dict)
    clients: dict[str, ClientStatusDocument] = Field(default_factory=dict)
    last_updated: datetime = EPOCH


# ── Mapping ──────────────────────────────────────────────────────────

def message_to_entity(doc: MessageDocument) -> Message:
    """Map document → domain entity."""
    return Message(
        id=doc.id,
        title=doc.title,
        content=doc.content,
        author=doc.author,
        created_at=as_utc(doc.created_at),
        updated_at=as_utc(doc.updated_at),
        priority=doc.priority,
        expires_at=as_utc(doc.expires_at) if doc.expires_at else None,
        enabled=doc.enabled,
    )


def message_to_document(entity: Message) -> MessageDocument:
    """Map domain entity → document."""
    return MessageDocument(
        id=entity.id,
        title=entity.title,
        content=entity.content,
        author=entity.author,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
        priority=entity.priority,
        expires_at=entity.expires_at,
        enabled=entity.enabled,
    )


def client_to_entity(doc: ClientStatusDocument) -> ClientStatus:
    return ClientStatus(
        id=doc.id,
        name=doc.name,
        last_seen=as_utc(doc.last_seen),
        is_online=doc.is_online,
        ip_address=doc.ip_address,
        device_info=doc.device_info,
    )


def client_to_document(entity: ClientStatus) -> ClientStatusDocument:
    return ClientStatusDocument(
        id=entity.id,
        name=entity.name,
        last_seen=entity.last_seen,
        is_online=entity.is_online,
        ip_address=entity.ip_address,
        device_info=entity.device_info,
    )
