"""Poll-until-complete driver for thread-based assistant runs.

One completion is four steps: acquire a thread for the conversation, post
the user message, start a run, then poll the run until it finishes.

Polling rules:
- attempt ``n`` (0-based) waits ``min(initial_delay * multiplier**n, max_delay)``
  before the next poll, i.e. 1.0s, 1.2s, 1.44s ... capped at 5.0s;
- ``completed`` returns the first text block of the assistant message whose
  ``run_id`` matches; if it is not visible yet, polling continues;
- ``failed`` / ``cancelled`` / ``expired`` / ``incomplete`` fail immediately;
- network, server and parse errors wait a flat ``transient_delay`` and are
  retried, except on the last attempt where they propagate;
- after ``max_attempts`` polls without a reply, :class:`PollingTimeoutError`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from agentchat.assistants.models import TERMINAL_FAILURE_STATUSES, RunStatus
from agentchat.core.cancellation import CancellationToken, guarded
from agentchat.core.errors import (
    NetworkError,
    ParseError,
    PollingTimeoutError,
    RunFailedError,
    ServerError,
)
from agentchat.utils.telemetry import (
    ATTR_CONVERSATION_ID,
    ATTR_POLL_ATTEMPTS,
    ATTR_RUN_ID,
    ATTR_RUN_STATUS,
    get_tracer,
)

if TYPE_CHECKING:
    from agentchat.assistants.client import AssistantsClient

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_TRANSIENT_ERRORS = (NetworkError, ServerError, ParseError)

SleepFn = Callable[[float], Awaitable[None]]
CreateThreadFn = Callable[[], Awaitable[str]]


class ThreadCache:
    """Conversation id to thread id mapping, shareable between state machines.

    A per-conversation lock serialises thread creation so concurrent first
    calls for one conversation create exactly one thread. The lock is
    dropped once the thread id is cached.
    """

    def __init__(self) -> None:
        self._threads: dict[str, str] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, conversation_id: str) -> str | None:
        return self._threads.get(conversation_id)

    def invalidate(self, conversation_id: str) -> None:
        self._threads.pop(conversation_id, None)
        self._locks.pop(conversation_id, None)

    async def acquire(self, conversation_id: str, create: CreateThreadFn) -> str:
        """Return the cached thread, calling *create* on first use."""
        cached = self._threads.get(conversation_id)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(conversation_id, asyncio.Lock())
        async with lock:
            cached = self._threads.get(conversation_id)
            if cached is not None:
                return cached
            thread_id = await create()
            self._threads[conversation_id] = thread_id
            self._locks.pop(conversation_id, None)
            logger.debug("Created thread %s for conversation %s", thread_id, conversation_id)
            return thread_id


class CompletionStateMachine:
    """Drives a run from message post to assistant reply.

    Thread ids live in a :class:`ThreadCache`. Pass the same cache to every
    machine that should see the same conversations.
    """

    def __init__(
        self,
        client: AssistantsClient,
        *,
        threads: ThreadCache | None = None,
        max_attempts: int = 60,
        initial_delay: float = 1.0,
        multiplier: float = 1.2,
        max_delay: float = 5.0,
        transient_delay: float = 1.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        self.client = client
        self.threads = threads if threads is not None else ThreadCache()
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.transient_delay = transient_delay
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Thread cache
    # ------------------------------------------------------------------

    def cached_thread(self, conversation_id: str) -> str | None:
        return self.threads.get(conversation_id)

    def invalidate_thread(self, conversation_id: str) -> None:
        """Forget the thread for *conversation_id*; the next run creates a new one."""
        self.threads.invalidate(conversation_id)

    async def acquire_thread(
        self,
        conversation_id: str | None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Return the cached thread for the conversation, creating it on first use.

        Without a conversation id every call gets a fresh, uncached thread.
        """
        if conversation_id is None:
            return await guarded(self.client.create_thread(), cancel_token)
        return await self.threads.acquire(
            conversation_id, lambda: guarded(self.client.create_thread(), cancel_token)
        )

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def backoff_delay(self, attempt: int) -> float:
        """Delay after a non-terminal poll at 0-based *attempt*."""
        return min(self.initial_delay * self.multiplier**attempt, self.max_delay)

    async def run(
        self,
        text: str,
        *,
        assistant_id: str,
        conversation_id: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Post *text* to the conversation's thread and wait for the reply.

        Raises:
            RunFailedError: The run ended in a failure status.
            PollingTimeoutError: No reply within ``max_attempts`` polls.
            OperationCancelledError: *cancel_token* fired.
        """
        with _tracer.start_as_current_span("assistants.run") as span:
            if conversation_id is not None:
                span.set_attribute(ATTR_CONVERSATION_ID, conversation_id)

            thread_id = await self.acquire_thread(conversation_id, cancel_token=cancel_token)
            await guarded(self.client.create_message(thread_id, text), cancel_token)
            run = await guarded(self.client.create_run(thread_id, assistant_id), cancel_token)
            span.set_attribute(ATTR_RUN_ID, run.id)
            logger.debug("Started run %s on thread %s", run.id, thread_id)

            return await self.poll(thread_id, run.id, cancel_token=cancel_token)

    async def poll(
        self,
        thread_id: str,
        run_id: str,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Poll *run_id* until it yields a reply, fails, or the budget runs out."""
        with _tracer.start_as_current_span("assistants.poll") as span:
            span.set_attribute(ATTR_RUN_ID, run_id)
            for attempt in range(self.max_attempts):
                span.set_attribute(ATTR_POLL_ATTEMPTS, attempt + 1)
                last_attempt = attempt == self.max_attempts - 1
                try:
                    run = await guarded(self.client.get_run(thread_id, run_id), cancel_token)
                    span.set_attribute(ATTR_RUN_STATUS, run.status)

                    if run.status == RunStatus.COMPLETED.value:
                        messages = await guarded(
                            self.client.list_messages(thread_id), cancel_token
                        )
                        reply = messages.reply_for_run(run_id)
                        if reply is not None:
                            return reply
                        logger.debug("Run %s completed but its reply is not listed yet", run_id)
                    elif run.status in TERMINAL_FAILURE_STATUSES:
                        raise RunFailedError(run.status)

                    delay = self.backoff_delay(attempt)
                except _TRANSIENT_ERRORS as exc:
                    if last_attempt:
                        raise
                    logger.warning(
                        "Transient error polling run %s (attempt %d/%d): %s",
                        run_id,
                        attempt + 1,
                        self.max_attempts,
                        exc,
                    )
                    delay = self.transient_delay

                if not last_attempt:
                    await guarded(self._sleep(delay), cancel_token)

            raise PollingTimeoutError(self.max_attempts)
