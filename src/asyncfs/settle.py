"""
Summary: Wait for a fixed set of awaitables regardless of their outcome.
Why: Collect every result and failure in input order without short-circuiting.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SettlementStatus(str, Enum):
    """Final state of a settled awaitable."""

    RESOLVED = "resolved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Settlement:
    """Outcome of one awaitable: its status and its value or exception."""

    status: SettlementStatus
    payload: Any = None

    @property
    def resolved(self) -> bool:
        return self.status is SettlementStatus.RESOLVED

    def __iter__(self) -> Iterator[Any]:
        yield self.status
        yield self.payload


def _settlement_of(item: Any) -> Settlement:
    if not asyncio.isfuture(item):
        return Settlement(SettlementStatus.RESOLVED, item)
    if item.cancelled():
        return Settlement(SettlementStatus.REJECTED, asyncio.CancelledError())
    exc = item.exception()
    if exc is not None:
        return Settlement(SettlementStatus.REJECTED, exc)
    return Settlement(SettlementStatus.RESOLVED, item.result())


async def all_complete(awaitables: Iterable[Any]) -> list[Settlement]:
    """Wait until every awaitable finished and report each outcome.

    Plain values count as already resolved. The same awaitable passed more
    than once is scheduled once and reported at every position it appears.
    Failures never short-circuit the wait.

    Args:
        awaitables: Coroutines, tasks, futures or plain values.

    Returns:
        list[Settlement]: One settlement per input, in input order.
    """
    scheduled: dict[int, asyncio.Future[Any]] = {}
    slots: list[Any] = []
    for item in awaitables:
        if inspect.isawaitable(item):
            key = id(item)
            if key not in scheduled:
                scheduled[key] = asyncio.ensure_future(item)
            slots.append(scheduled[key])
        else:
            slots.append(item)

    if scheduled:
        _ = await asyncio.wait(set(scheduled.values()))

    return [_settlement_of(slot) for slot in slots]


__all__ = ["Settlement", "SettlementStatus", "all_complete"]
