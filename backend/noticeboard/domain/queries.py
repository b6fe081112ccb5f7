"""Read-side views over the snapshot: active filtering, ordering, pagination, presence.

All functions are pure: they take snapshot values plus the current time and
never mutate their inputs.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import TypeVar

from noticeboard.domain.entities import ClientStatus, DataStats, Message, Page

T = TypeVar("T")

PRESENCE_WINDOW = timedelta(minutes=5)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


# ── Messages ─────────────────────────────────────────────────────────

def active_messages(messages: Iterable[Message], now: datetime) -> list[Message]:
    """Messages whose expiry, if any, is still in the future."""
    return [m for m in messages if m.is_active(now)]


def order_by_priority(messages: Iterable[Message]) -> list[Message]:
    """Most important first; within a priority, newest first."""
    # Two stable passes: secondary key first, then primary.
    by_newest = sorted(messages, key=lambda m: m.created_at, reverse=True)
    return sorted(by_newest, key=lambda m: m.priority.rank)


# ── Pagination ───────────────────────────────────────────────────────

def clamp_pagination(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Normalise raw paging parameters: page >= 1, page_size in [1, 100]."""
    page = DEFAULT_PAGE if page is None else max(page, 1)
    page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page, page_size


def paginate(items: Sequence[T], page: int | None = None, page_size: int | None = None) -> Page[T]:
    """Slice an already ordered sequence. Pages past the end are empty."""
    page, page_size = clamp_pagination(page, page_size)
    total = len(items)
    start = (page - 1) * page_size
    return Page(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
        items=list(items[start : start + page_size]),
    )


# ── Clients ──────────────────────────────────────────────────────────

def is_online(
    client: ClientStatus, now: datetime, window: timedelta = PRESENCE_WINDOW
) -> bool:
    """Online means flagged online *and* seen within the presence window."""
    return client.is_online and now - client.last_seen < window


def online_clients(
    clients: Iterable[ClientStatus], now: datetime, window: timedelta = PRESENCE_WINDOW
) -> list[ClientStatus]:
    return [c for c in clients if is_online(c, now, window)]


# ── Stats ────────────────────────────────────────────────────────────

def compute_stats(
    messages: Sequence[Message],
    clients: Sequence[ClientStatus],
    last_updated: datetime,
    now: datetime,
    window: timedelta = PRESENCE_WINDOW,
) -> DataStats:
    return DataStats(
        total_messages=len(messages),
        active_messages=sum(1 for m in messages if m.is_active(now)),
        total_clients=len(clients),
        online_clients=sum(1 for c in clients if is_online(c, now, window)),
        last_updated=last_updated,
    )
