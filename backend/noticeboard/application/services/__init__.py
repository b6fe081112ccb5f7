from .message_service import MessageService, parse_message_id
from .client_service import ClientService, StatsService

__all__ = [
    "MessageService",
    "ClientService",
    "StatsService",
    "parse_message_id",
]
