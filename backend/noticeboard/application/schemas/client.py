"""Pydantic DTOs for client presence and aggregate stats."""

from datetime import datetime

from pydantic import BaseModel, Field


class ClientHeartbeat(BaseModel):
    """Sent periodically by a connected client to stay listed as online."""

    id: str = Field(..., min_length=1, max_length=255, examples=["kiosk-lobby"])
    name: str = Field(..., min_length=1, max_length=255, examples=["Lobby screen"])
    device_info: str | None = Field(None, max_length=500)


class ClientStatusResponse(BaseModel):
    id: str
    name: str
    last_seen: datetime
    is_online: bool
    ip_address: str | None
    device_info: str | None

    model_config = {"from_attributes": True}


class DataStatsResponse(BaseModel):
    total_messages: int
    active_messages: int
    total_clients: int
    online_clients: int
    last_updated: datetime

    model_config = {"from_attributes": True}
