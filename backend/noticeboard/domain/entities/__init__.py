from .message import Message, Priority, as_utc
from .client_status import ClientStatus
from .stats import DataStats, Page

__all__ = [
    "Message",
    "Priority",
    "ClientStatus",
    "DataStats",
    "Page",
    "as_utc",
]
