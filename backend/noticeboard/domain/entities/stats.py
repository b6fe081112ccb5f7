"""Derived read-side values: never persisted."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DataStats:
    """Aggregate counts over the current snapshot."""

    total_messages: int
    active_messages: int
    total_clients: int
    online_clients: int
    last_updated: datetime


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of an ordered result list."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: list[T] = field(default_factory=list)
