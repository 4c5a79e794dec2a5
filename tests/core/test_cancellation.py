"""Tests for CancellationToken."""

import asyncio

import pytest

from agentchat.core.cancellation import CancellationToken, guarded
from agentchat.core.errors import OperationCancelledError


class TestCancellationToken:
    async def test_run_returns_result(self) -> None:
        async def work() -> int:
            return 42

        assert await CancellationToken().run(work()) == 42

    async def test_already_cancelled(self) -> None:
        token = CancellationToken()
        token.cancel()

        async def work() -> int:
            return 1

        with pytest.raises(OperationCancelledError):
            await token.run(work())

    async def test_cancel_interrupts_pending_work(self) -> None:
        token = CancellationToken()
        started = asyncio.Event()
        work_cancelled = False

        async def slow() -> None:
            nonlocal work_cancelled
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                work_cancelled = True
                raise

        task = asyncio.create_task(token.run(slow()))
        await started.wait()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            await task
        assert work_cancelled

    async def test_errors_propagate(self) -> None:
        async def boom() -> None:
            raise ValueError("x")

        with pytest.raises(ValueError, match="x"):
            await CancellationToken().run(boom())

    def test_raise_if_cancelled(self) -> None:
        token = CancellationToken()
        token.raise_if_cancelled()
        token.cancel()
        assert token.cancelled
        with pytest.raises(OperationCancelledError):
            token.raise_if_cancelled()

    async def test_guarded_without_token(self) -> None:
        async def work() -> str:
            return "ok"

        assert await guarded(work(), None) == "ok"
