"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status

from noticeboard.application.interfaces import MessageStore
from noticeboard.application.services import ClientService, MessageService, StatsService


def get_message_store(request: Request) -> MessageStore:
    """The store opened by the application lifespan."""
    store: MessageStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is not initialised",
        )
    return store


async def get_message_service(
    store: MessageStore = Depends(get_message_store),
) -> AsyncGenerator[MessageService, None]:
    """Provides a MessageService bound to the shared store."""
    yield MessageService(store)


async def get_client_service(
    store: MessageStore = Depends(get_message_store),
) -> AsyncGenerator[ClientService, None]:
    yield ClientService(store)


async def get_stats_service(
    store: MessageStore = Depends(get_message_store),
) -> AsyncGenerator[StatsService, None]:
    yield StatsService(store)
