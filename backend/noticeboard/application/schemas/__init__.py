from .message import (
    MessageCreate,
    MessageUpdate,
    MessageResponse,
    PaginatedMessagesResponse,
)
from .client import ClientHeartbeat, ClientStatusResponse, DataStatsResponse

__all__ = [
    "MessageCreate",
    "MessageUpdate",
    "MessageResponse",
    "PaginatedMessagesResponse",
    "ClientHeartbeat",
    "ClientStatusResponse",
    "DataStatsResponse",
]
