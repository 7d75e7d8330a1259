from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from enum import Enum

from .errors import Cancelled, ContextError, DeadlineExceeded

CancelFunc = Callable[[], None]
DoneCallback = Callable[["Context"], None]

_NO_KEY = object()


class ContextState(str, Enum):
    # Both terminal states are irreversible.
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class Context:
    """One node of a cancellation tree.

    Cancellable nodes own a done state and a set of live cancellable
    descendants, which they cancel with the same reason. Value nodes carry one
    key/value pair and share the done state of their nearest cancellable
    ancestor, so they never register anywhere. Value lookup walks towards the
    root.

    Contexts are built with ``background()`` and the ``with_*`` functions, not
    by calling the constructor directly.
    """

    __slots__ = (
        "_parent",
        "_key",
        "_value",
        "_deadline",
        "_cancellable",
        "_signal",
        "_lock",
        "_done",
        "_err",
        "_children",
        "_callbacks",
        "_callback_errors",
        "_timer",
    )

    def __init__(
        self,
        parent: Context | None,
        *,
        key: object = _NO_KEY,
        value: object = None,
        deadline: float | None = None,
        cancellable: bool = False,
    ) -> None:
        self._parent = parent
        self._key = key
        self._value = value
        self._deadline = deadline
        self._cancellable = cancellable
        # Node holding the done state this context reports.
        self._signal: Context = self if cancellable or parent is None else parent._signal
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._err: ContextError | None = None
        self._children: set[Context] = set()
        self._callbacks: list[DoneCallback] = []
        self._callback_errors: list[Exception] = []
        self._timer: threading.Timer | None = None

    @property
    def parent(self) -> Context | None:
        return self._parent

    @property
    def state(self) -> ContextState:
        err = self.err()
        if err is None:
            return ContextState.ACTIVE
        if isinstance(err, DeadlineExceeded):
            return ContextState.EXPIRED
        return ContextState.CANCELLED

    def deadline(self) -> float | None:
        # Earliest deadline on the path to the root, in time.monotonic() seconds.
        earliest: float | None = None
        node: Context | None = self
        while node is not None:
            if node._deadline is not None and (earliest is None or node._deadline < earliest):
                earliest = node._deadline
            node = node._parent
        return earliest

    def done(self) -> bool:
        return self._signal._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the context is done or ``timeout`` elapses; return done()."""
        return self._signal._done.wait(timeout)

    def err(self) -> ContextError | None:
        return self._signal._err

    def value(self, key: object) -> object | None:
        node: Context | None = self
        while node is not None:
            if node._key is not _NO_KEY and node._key == key:
                return node._value
            node = node._parent
        return None

    def add_done_callback(self, callback: DoneCallback) -> None:
        # Runs immediately (in the caller's thread) when already done.
        signal = self._signal
        with signal._lock:
            if signal._err is None:
                signal._callbacks.append(callback)
                return
        callback(self)

    def remove_done_callback(self, callback: DoneCallback) -> bool:
        signal = self._signal
        with signal._lock:
            try:
                signal._callbacks.remove(callback)
            except ValueError:
                return False
            return True

    def callback_errors(self) -> list[Exception]:
        """Exceptions raised by done callbacks when this context was cancelled."""
        signal = self._signal
        with signal._lock:
            return list(signal._callback_errors)

    def _adopt(self, child: Context) -> None:
        with self._lock:
            err = self._err
            if err is None:
                self._children.add(child)
                return
        child._cancel(err, detach=False)

    def _forget(self, child: Context) -> None:
        with self._lock:
            self._children.discard(child)

    def _cancel(self, reason: ContextError, *, detach: bool) -> None:
        # Subtree is walked with an explicit stack; tree depth is unbounded.
        notify: list[tuple[Context, list[DoneCallback]]] = []
        pending = [self]
        while pending:
            node = pending.pop()
            with node._lock:
                if node._err is not None:
                    continue
                node._err = reason
                children = list(node._children)
                node._children.clear()
                callbacks = list(node._callbacks)
                node._callbacks.clear()
                timer = node._timer
                node._timer = None
                node._done.set()
            if timer is not None:
                timer.cancel()
            pending.extend(children)
            notify.append((node, callbacks))

        if not notify:
            return
        try:
            for node, callbacks in notify:
                node._run_callbacks(callbacks)
        finally:
            if detach and self._parent is not None:
                self._parent._signal._forget(self)

    def _run_callbacks(self, callbacks: list[DoneCallback]) -> None:
        for callback in callbacks:
            try:
                callback(self)
            except Exception as exc:
                with self._lock:
                    self._callback_errors.append(exc)

    def _start_timer(self, seconds: float) -> None:
        timer = threading.Timer(seconds, self._cancel, args=(DeadlineExceeded(),), kwargs={"detach": True})
        timer.daemon = True
        with self._lock:
            if self._err is not None:
                return
            self._timer = timer
        timer.start()

    def __repr__(self) -> str:
        parts = [f"state={self.state.value}"]
        if self._key is not _NO_KEY:
            parts.append(f"key={self._key!r}")
        if self._deadline is not None:
            parts.append(f"deadline={self._deadline:.3f}")
        return f"Context({', '.join(parts)})"


_BACKGROUND = Context(None)


def background() -> Context:
    """Return the root context: never cancelled, no values, no deadline."""
    return _BACKGROUND


def _link(parent: Context, child: Context) -> None:
    # Only cancellable signal holders can ever cancel their descendants.
    signal = parent._signal
    if signal._cancellable:
        signal._adopt(child)


def with_cancel(parent: Context) -> tuple[Context, CancelFunc]:
    child = Context(parent, cancellable=True)
    _link(parent, child)

    def cancel() -> None:
        child._cancel(Cancelled(), detach=True)

    return child, cancel


def with_deadline(parent: Context, deadline: float) -> tuple[Context, CancelFunc]:
    """Derive a context that expires at ``deadline`` (time.monotonic() seconds)."""
    current = parent.deadline()
    if current is not None and current <= deadline:
        # Parent already expires first; its signal is enough.
        return with_cancel(parent)

    child = Context(parent, deadline=deadline, cancellable=True)
    _link(parent, child)

    def cancel() -> None:
        child._cancel(Cancelled(), detach=True)

    remaining = deadline - time.monotonic()
    if remaining <= 0:
        child._cancel(DeadlineExceeded(), detach=True)
    else:
        child._start_timer(remaining)
    return child, cancel


def with_timeout(parent: Context, timeout: float) -> tuple[Context, CancelFunc]:
    return with_deadline(parent, time.monotonic() + timeout)


def with_value(parent: Context, key: Hashable, value: object) -> Context:
    # Value nodes share their parent's done state and are never registered as children.
    if key is None:
        raise ValueError("context key must not be None")
    return Context(parent, key=key, value=value)
