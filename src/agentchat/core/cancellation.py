"""Cooperative cancellation for long-running completions.

A :class:`CancellationToken` is handed down from the caller. Every
suspension point (HTTP calls, backoff sleeps) is raced against it so a
cancelled operation stops promptly instead of finishing its poll loop.

Usage::

    token = CancellationToken()
    task = asyncio.create_task(agent.send_message("hi", cancel_token=token))
    ...
    token.cancel()  # task raises OperationCancelledError
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable
from typing import TypeVar

from agentchat.core.errors import OperationCancelledError

T = TypeVar("T")


class CancellationToken:
    """One-shot cancellation signal shared between a caller and an operation."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* unless the token fires first.

        When the token fires, the pending work is cancelled and
        :class:`OperationCancelledError` is raised.
        """
        if self._event.is_set():
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise OperationCancelledError()

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            if not waiter.done():
                waiter.cancel()

        if not work.done():
            work.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await work
            raise OperationCancelledError()
        return work.result()


async def guarded(awaitable: Awaitable[T], token: CancellationToken | None) -> T:
    """Await *awaitable*, racing it against *token* when one is given."""
    if token is None:
        return await awaitable
    return await token.run(awaitable)
