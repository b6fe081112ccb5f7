"""Snapshot store backed by a single JSON file.

The whole store lives in memory behind a reader/writer lock and is
rewritten to ``<data_dir>/<filename>`` after every committed mutation:

    <data_dir>/data.json     : the current snapshot
    <data_dir>/data.json.tmp : transient, replaced atomically over data.json

Writes are O(size of the store), which suits a small-team notice board.
"""

import copy
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError

from noticeboard.application.interfaces import MessageStore, MessageTransform
from noticeboard.domain import queries
from noticeboard.domain.entities import (
    ClientStatus,
    DataStats,
    Message,
    Page,
    Priority,
    as_utc,
)
from noticeboard.domain.exceptions import StorageError
from noticeboard.infrastructure.storage.rw_lock import ReadWriteLock
from noticeboard.infrastructure.storage.snapshot import (
    SnapshotDocument,
    client_to_document,
    client_to_entity,
    message_to_document,
    message_to_entity,
)

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "data.json"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonFileMessageStore(MessageStore):
    """Implements the MessageStore port on one JSON snapshot file.

    Use :meth:`open` to build an instance; it loads any existing snapshot.
    """

    def __init__(
        self,
        path: Path,
        document: SnapshotDocument | None = None,
        clock: Clock | None = None,
    ):
        document = document or SnapshotDocument()
        self._path = path
        self._clock = clock or _utc_now
        self._lock = ReadWriteLock()
        self._messages: dict[UUID, Message] = {
            key: message_to_entity(doc) for key, doc in document.messages.items()
        }
        self._clients: dict[str, ClientStatus] = {
            key: client_to_entity(doc) for key, doc in document.clients.items()
        }
        self._last_updated: datetime = document.last_updated
        self._writes = 0

    # ── Lifecycle ───────────────────────────────────────────────────

    @classmethod
    async def open(
        cls,
        data_dir: str | Path,
        filename: str = DEFAULT_FILENAME,
        clock: Clock | None = None,
    ) -> "JsonFileMessageStore":
        """Create ``data_dir`` if needed and load the snapshot found there.

        An unreadable directory is fatal; an unparseable snapshot is not.
        """
        directory = Path(data_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        document = cls._load(path)
        logger.info(
            "Loaded snapshot %s: %d messages, %d clients",
            path,
            len(document.messages),
            len(document.clients),
        )
        return cls(path, document, clock)

    @staticmethod
    def _load(path: Path) -> SnapshotDocument:
        if not path.exists():
            return SnapshotDocument()
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StorageError(str(path), str(exc)) from exc
        try:
            return SnapshotDocument.model_validate_json(raw)
        except ValidationError as exc:
            # Lossy recovery: the next write overwrites the unreadable file.
            logger.warning(
                "Snapshot %s could not be parsed, starting with an empty store: %s",
                path,
                exc.errors()[0]["msg"] if exc.errors() else exc,
            )
            return SnapshotDocument()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def write_count(self) -> int:
        """Number of snapshot writes since this instance was opened."""
        return self._writes

    @property
    def last_updated(self) -> datetime:
        return self._last_updated

    # ── Messages ────────────────────────────────────────────────────

    async def create_message(
        self,
        *,
        title: str,
        content: str,
        author: str,
        priority: Priority,
        expires_at: datetime | None = None,
    ) -> Message:
        async with self._lock.write():
            now = self._tick()
            message = Message(
                id=uuid4(),
                title=title,
                content=content,
                author=author,
                priority=Priority(priority),
                expires_at=as_utc(expires_at) if expires_at else None,
                created_at=now,
                updated_at=now,
            )
            previous = self._last_updated
            self._messages[message.id] = message
            self._last_updated = now
            self._commit(previous, lambda: self._messages.pop(message.id, None))
            logger.info("Created message %s (%s)", message.id, message.priority.value)
            return copy.copy(message)

    async def get_message(self, message_id: UUID) -> Message | None:
        async with self._lock.read():
            message = self._messages.get(message_id)
            return copy.copy(message) if message else None

    async def get_all_messages(self) -> list[Message]:
        async with self._lock.read():
            return [copy.copy(m) for m in self._messages.values()]

    async def get_active_messages(self) -> list[Message]:
        async with self._lock.read():
            return self._ordered_active(self._clock())

    async def get_active_messages_page(
        self, page: int | None = None, page_size: int | None = None
    ) -> Page[Message]:
        async with self._lock.read():
            ordered = self._ordered_active(self._clock())
        return queries.paginate(ordered, page, page_size)

    async def update_message(
        self, message_id: UUID, changes: Mapping[str, Any]
    ) -> Message | None:
        return await self.apply_to_message(message_id, lambda _current: changes)

    async def apply_to_message(
        self, message_id: UUID, transform: MessageTransform
    ) -> Message | None:
        async with self._lock.write():
            message = self._messages.get(message_id)
            if message is None:
                return None
            changes = dict(transform(copy.copy(message)))
            if changes.get("expires_at") is not None:
                changes["expires_at"] = as_utc(changes["expires_at"])
            updated = copy.copy(message)
            now = self._tick()
            updated.update(now, **changes)
            previous = self._last_updated
            self._messages[message_id] = updated
            self._last_updated = now

            def undo() -> None:
                self._messages[message_id] = message

            self._commit(previous, undo)
            logger.info("Updated message %s (%s)", message_id, ", ".join(changes) or "touch")
            return copy.copy(updated)

    async def delete_message(self, message_id: UUID) -> bool:
        async with self._lock.write():
            message = self._messages.pop(message_id, None)
            if message is None:
                return False
            previous = self._last_updated
            self._last_updated = self._tick()

            def undo() -> None:
                self._messages[message_id] = message

            self._commit(previous, undo)
            logger.info("Deleted message %s", message_id)
            return True

    # ── Clients ─────────────────────────────────────────────────────

    async def update_client_status(self, status: ClientStatus) -> None:
        async with self._lock.write():
            before = self._clients.get(status.id)
            previous = self._last_updated
            stored = copy.copy(status)
            stored.last_seen = as_utc(stored.last_seen)
            self._clients[status.id] = stored
            self._last_updated = self._tick()

            def undo() -> None:
                if before is None:
                    self._clients.pop(status.id, None)
                else:
                    self._clients[status.id] = before

            self._commit(previous, undo)
            logger.debug("Client %s is %s", status.id, "online" if status.is_online else "offline")

    async def mark_client_offline(self, client_id: str) -> None:
        async with self._lock.write():
            client = self._clients.get(client_id)
            if client is None:
                return
            updated = copy.copy(client)
            previous = self._last_updated
            now = self._tick()
            updated.mark_offline(now)
            self._clients[client_id] = updated
            self._last_updated = now

            def undo() -> None:
                self._clients[client_id] = client

            self._commit(previous, undo)
            logger.info("Client %s marked offline", client_id)

    async def get_clients(self) -> list[ClientStatus]:
        async with self._lock.read():
            return [copy.copy(c) for c in self._clients.values()]

    async def get_online_clients(self) -> list[ClientStatus]:
        async with self._lock.read():
            online = queries.online_clients(self._clients.values(), self._clock())
            return [copy.copy(c) for c in online]

    # ── Stats ───────────────────────────────────────────────────────

    async def get_stats(self) -> DataStats:
        async with self._lock.read():
            return queries.compute_stats(
                list(self._messages.values()),
                list(self._clients.values()),
                self._last_updated,
                self._clock(),
            )

    # ── Internals (caller holds the lock) ──────────────────────────

    def _ordered_active(self, now: datetime) -> list[Message]:
        active = queries.active_messages(self._messages.values(), now)
        return [copy.copy(m) for m in queries.order_by_priority(active)]

    def _tick(self) -> datetime:
        """Current time, forced past the last mutation so timestamps strictly increase."""
        now = self._clock()
        if now <= self._last_updated:
            now = self._last_updated + timedelta(microseconds=1)
        return now

    def _commit(self, previous_last_updated: datetime, undo: Callable[[], Any]) -> None:
        """Persist the snapshot; on failure revert the in-memory mutation and re-raise."""
        try:
            self._persist()
        except StorageError:
            undo()
            self._last_updated = previous_last_updated
            raise

    def _persist(self) -> None:
        document = SnapshotDocument(
            messages={key: message_to_document(m) for key, m in self._messages.items()},
            clients={key: client_to_document(c) for key, c in self._clients.items()},
            last_updated=self._last_updated,
        )
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = document.model_dump_json(indent=2)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self._path)
        except (OSError, ValueError) as exc:
            tmp_path.unlink(missing_ok=True)
            logger.error("Failed to write snapshot %s: %s", self._path, exc)
            raise StorageError(str(self._path), str(exc)) from exc
        self._writes += 1
        logger.debug(
            "Snapshot written: %s (%d messages, %d clients)",
            self._path,
            len(self._messages),
            len(self._clients),
        )
