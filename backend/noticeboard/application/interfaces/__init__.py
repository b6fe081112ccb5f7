from .message_store import MessageStore, MessageTransform

__all__ = [
    "MessageStore",
    "MessageTransform",
]
