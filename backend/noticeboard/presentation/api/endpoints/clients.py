"""Client presence endpoints."""

from fastapi import APIRouter, Depends, Request, status

from noticeboard.application.schemas import ClientHeartbeat, ClientStatusResponse
from noticeboard.application.services import ClientService
from noticeboard.infrastructure.dependencies import get_client_service

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[ClientStatusResponse])
async def list_clients(
    service: ClientService = Depends(get_client_service),
) -> list[ClientStatusResponse]:
    """All known clients, as last recorded."""
    clients = await service.list_clients()
    return [ClientStatusResponse.model_validate(c) for c in clients]


@router.get("/online", response_model=list[ClientStatusResponse])
async def list_online_clients(
    service: ClientService = Depends(get_client_service),
) -> list[ClientStatusResponse]:
    """Clients flagged online and seen within the last five minutes."""
    clients = await service.list_online_clients()
    return [ClientStatusResponse.model_validate(c) for c in clients]


@router.post("/heartbeat", response_model=ClientStatusResponse)
async def heartbeat(
    data: ClientHeartbeat,
    request: Request,
    service: ClientService = Depends(get_client_service),
) -> ClientStatusResponse:
    ip_address = request.client.host if request.client else None
    client = await service.heartbeat(data, ip_address=ip_address)
    return ClientStatusResponse.model_validate(client)


@router.post("/{client_id}/offline", status_code=status.HTTP_204_NO_CONTENT)
async def mark_offline(
    client_id: str,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Mark a client offline. Unknown ids are accepted silently."""
    await service.mark_offline(client_id)
