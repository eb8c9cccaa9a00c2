"""Request contexts carrying a deadline and a cancellation signal."""

from __future__ import annotations

import threading
import time

from .exceptions import ContextError, DeadlineExceededError, RequestCancelledError


class RequestContext:
    """Deadline and cancellation token passed into every suspending call.

    A context without a deadline never expires on its own. Child contexts
    built with :meth:`with_timeout` inherit the parent's deadline when it is
    sooner and are cancelled together with the parent.
    """

    def __init__(self, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._cancelled = threading.Event()
        self._children: list[RequestContext] = []
        self._lock = threading.Lock()

    @classmethod
    def background(cls) -> RequestContext:
        return cls()

    @classmethod
    def from_timeout(cls, timeout: float) -> RequestContext:
        return cls(time.monotonic() + timeout)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def with_timeout(self, timeout: float) -> RequestContext:
        """Return a child whose deadline is the sooner of ours and ``now + timeout``."""

        deadline = time.monotonic() + timeout
        if self._deadline is not None:
            deadline = min(deadline, self._deadline)

        child = RequestContext(deadline)
        with self._lock:
            if self._cancelled.is_set():
                child.cancel()
            else:
                self._children.append(child)
        return child

    def release(self, child: RequestContext) -> None:
        """Forget a child once the call that owned it has returned."""

        with self._lock:
            try:
                self._children.remove(child)
            except ValueError:
                pass

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def deadline(self) -> float | None:
        return self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, ``None`` when unbounded."""

        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        self._cancelled.set()
        with self._lock:
            children = list(self._children)
        for child in children:
            child.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def done(self) -> bool:
        return self.cancelled or self.expired

    def error(self) -> ContextError | None:
        """Return the error describing why the context ended, if it has."""

        if self.cancelled:
            return RequestCancelledError()
        if self.expired:
            return DeadlineExceededError(details={"deadline": self._deadline})
        return None

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    # ------------------------------------------------------------------
    # Suspension
    # ------------------------------------------------------------------
    def sleep(self, seconds: float) -> None:
        """Wait ``seconds`` unless the context ends first.

        Raises:
            ContextError: If the context was cancelled or its deadline passed
                before the full interval elapsed
        """
        remaining = self.remaining()
        wait_for = seconds if remaining is None else min(seconds, remaining)

        if self._cancelled.wait(wait_for):
            raise RequestCancelledError()
        if remaining is not None and remaining <= seconds:
            raise DeadlineExceededError(details={"deadline": self._deadline})
