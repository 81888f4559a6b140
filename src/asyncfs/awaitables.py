"""
Summary: Promise-like capability checks and blocking-to-awaitable adapters.
Why: Give callers one place to guard inputs and lift blocking calls onto the event loop.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, Protocol, TypeVar, runtime_checkable

import anyio.to_thread

P = ParamSpec("P")
R = TypeVar("R")


@runtime_checkable
class Thenable(Protocol):
    """Minimal promise-like capability set."""

    def then(
        self,
        on_resolved: Callable[[Any], Any],
        on_rejected: Callable[[BaseException], Any] | None = None,
    ) -> Any:
        """Register continuations for success and, optionally, failure."""
        ...

    def catch(self, on_rejected: Callable[[BaseException], Any]) -> Any:
        """Register a continuation for failure only."""
        ...


def is_promise(thing: object) -> bool:
    """Return True if ``thing`` behaves like a promise.

    asyncio futures and tasks always qualify, whatever their state. Other
    objects qualify when both ``then`` and ``catch`` are callable, including
    attributes supplied dynamically through ``__getattr__``. Never raises:
    an attribute lookup that fails counts as a missing capability.
    """
    if asyncio.isfuture(thing):
        return True
    try:
        return callable(getattr(thing, "then", None)) and callable(getattr(thing, "catch", None))
    except Exception:
        return False


def promisify(fn: Callable[P, R]) -> Callable[P, Awaitable[R]]:
    """Turn a blocking callable into a coroutine function.

    The call runs in a worker thread; its return value is the coroutine's
    result and any exception it raises propagates unchanged.

    usage:
        read = promisify(pathlib.Path.read_text)
        text = await read(Path("notes.txt"), encoding="utf-8")
    """

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return await anyio.to_thread.run_sync(functools.partial(fn, *args, **kwargs))

    return wrapper


__all__ = ["Thenable", "is_promise", "promisify"]
