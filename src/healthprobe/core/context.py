"""Deadline and cancellation carrier handed to every probe check."""

import asyncio
import inspect
import time
import weakref
from collections.abc import Awaitable
from typing import Any, TypeVar

from ..domain.exceptions import ContextCancelledError, DeadlineExceededError

T = TypeVar("T")


class ProbeContext:
    """Shared, cancellable context for one execution round.

    A context ends when it is cancelled explicitly, when its deadline passes,
    or when its parent ends. Checks cooperate by running their I/O through
    :meth:`run`, which aborts the work as soon as the context ends.

    Contexts are bound to the event loop that awaits them; ``cancel`` must be
    called from that loop's thread.
    """

    def __init__(
        self, timeout: float | None = None, parent: "ProbeContext | None" = None
    ):
        """Initialize probe context.

        Args:
            timeout: Seconds until the context expires, None for no deadline
            parent: Context whose cancellation and deadline are inherited
        """
        self.timeout = timeout
        self._parent = parent
        self._children: weakref.WeakSet[ProbeContext] = weakref.WeakSet()
        self._event = asyncio.Event()
        self._cancelled = False
        self._cancel_reason: str | None = None

        deadline = time.monotonic() + timeout if timeout is not None else None
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

        if parent is not None:
            parent._children.add(self)
            if parent._cancelled:
                self.cancel(parent._cancel_reason)

    @classmethod
    def background(cls) -> "ProbeContext":
        """A context with no deadline that is never cancelled implicitly."""
        return cls()

    @property
    def deadline(self) -> float | None:
        """Deadline on the ``time.monotonic`` clock."""
        return self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        """True once the context has ended for any reason."""
        return self._cancelled or self.expired

    @property
    def error(self) -> ContextCancelledError | DeadlineExceededError | None:
        """Why the context ended, or None while it is still live."""
        if self._cancelled:
            return ContextCancelledError(self._cancel_reason)
        if self.expired:
            return DeadlineExceededError(self.timeout)
        return None

    def cancel(self, reason: str | None = None) -> None:
        """Cancel this context and every context derived from it."""
        if self._cancelled:
            return
        self._cancelled = True
        self._cancel_reason = reason
        self._event.set()
        for child in list(self._children):
            child.cancel(reason)

    def with_timeout(self, timeout: float) -> "ProbeContext":
        """Derive a child context that expires after ``timeout`` seconds."""
        return ProbeContext(timeout=timeout, parent=self)

    async def wait(self) -> None:
        """Block until the context ends."""
        while not self.cancelled:
            try:
                await asyncio.wait_for(self._event.wait(), timeout=self.remaining())
            except TimeoutError:
                continue

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the context ends first.

        Raises:
            ContextCancelledError: The context was cancelled
            DeadlineExceededError: The deadline passed
        """
        error = self.error
        if error is not None:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise error

        work: asyncio.Future[T] = asyncio.ensure_future(awaitable)
        watcher = asyncio.ensure_future(self.wait())
        try:
            await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            watcher.cancel()
            raise

        if work.done():
            watcher.cancel()
            return work.result()

        work.cancel()
        await asyncio.wait({work})
        if not work.cancelled():
            # Mark a late exception as retrieved; the context error wins.
            work.exception()
        raise self.error or DeadlineExceededError(self.timeout)

    def __enter__(self) -> "ProbeContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cancel("context closed")

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"ProbeContext(timeout={self.timeout!r}, state={state})"
