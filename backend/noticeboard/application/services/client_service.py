"""Application service for client presence and store statistics."""

from datetime import datetime, timezone

from noticeboard.application.interfaces import MessageStore
from noticeboard.application.schemas import ClientHeartbeat
from noticeboard.domain.entities import ClientStatus, DataStats


class ClientService:
    """Tracks which clients are connected. Depends on the store port (DI)."""

    def __init__(self, store: MessageStore):
        self._store = store

    async def heartbeat(
        self, data: ClientHeartbeat, ip_address: str | None = None
    ) -> ClientStatus:
        """Record that a client is alive right now, replacing its previous record."""
        status = ClientStatus(
            id=data.id,
            name=data.name,
            last_seen=datetime.now(timezone.utc),
            is_online=True,
            ip_address=ip_address,
            device_info=data.device_info,
        )
        await self._store.update_client_status(status)
        return status

    async def mark_offline(self, client_id: str) -> None:
        await self._store.mark_client_offline(client_id)

    async def list_clients(self) -> list[ClientStatus]:
        return await self._store.get_clients()

    async def list_online_clients(self) -> list[ClientStatus]:
        return await self._store.get_online_clients()


class StatsService:
    """Read-only aggregate view over the store."""

    def __init__(self, store: MessageStore):
        self._store = store

    async def get_stats(self) -> DataStats:
        return await self._store.get_stats()
