"""Process-wide registry of log targets.

Every record emitted through the standard :mod:`logging` machinery is handed
to a :class:`RegistryHandler` attached to the root logger, converted into a
:class:`LogRecord` and dispatched to each registered target. Targets whose
``record`` method is a coroutine function are run fire-and-forget, so a slow
delivery never blocks the code that emitted the log line.

Example:
    ```python
    from lark_log_webhook.core.targets import LogRecord, default_registry

    class PrintTarget:
        def record(self, record: LogRecord) -> None:
            print(record.type, record.content)

    handle = default_registry.register(PrintTarget())
    ...
    handle.unregister()
    ```
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import sys
import threading
import time
import traceback
import weakref
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, Protocol

from .config import LogType
from .logger import level_to_type


@dataclass(frozen=True)
class LogRecord:
    """A single log event as seen by log targets.

    Attributes:
        name: Name of the logger that emitted the record
        type: Log type derived from the record level
        content: Rendered text, may contain ANSI escape sequences
        timestamp: Creation time in seconds since the epoch
    """

    name: str
    type: LogType
    content: str
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_logging(cls, record: logging.LogRecord, content: str) -> LogRecord:
        """Build a record from a stdlib ``logging.LogRecord``."""
        return cls(
            name=record.name,
            type=level_to_type(record.levelno),
            content=content,
            timestamp=record.created,
        )


class LogTarget(Protocol):
    """Consumer of emitted log records."""

    def record(self, record: LogRecord) -> Coroutine[Any, Any, None] | None: ...


class TargetHandle:
    """Registration handle returned by :meth:`TargetRegistry.register`."""

    def __init__(self, registry: TargetRegistry, target: LogTarget) -> None:
        self._registry = registry
        self._target = target
        self._released = False

    @property
    def target(self) -> LogTarget:
        return self._target

    @property
    def active(self) -> bool:
        """Whether the target is still registered through this handle."""
        return not self._released and self._registry.contains(self._target)

    def unregister(self) -> bool:
        """Remove the target from the registry.

        Calling this more than once is a no-op.

        Returns:
            True if the target was removed by this call
        """
        if self._released:
            return False
        self._released = True
        return self._registry.unregister(self._target)

    def __repr__(self) -> str:
        state = "active" if self.active else "released"
        return f"<TargetHandle {self._target!r} ({state})>"


class RegistryHandler(logging.Handler):
    """Logging handler that feeds stdlib records into a :class:`TargetRegistry`."""

    def __init__(self, registry: TargetRegistry, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.registry = registry
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            content = self.format(record)
            self.registry.dispatch(LogRecord.from_logging(record, content))
        except Exception:
            self.handleError(record)


class TargetRegistry:
    """Registry of log targets consulted on every log emission.

    Coroutines returned by targets are scheduled on the running event loop of
    the emitting thread. When the emitting thread has no running loop, they
    are submitted to a background event loop owned by the registry.
    """

    _instances: weakref.WeakSet[TargetRegistry] = weakref.WeakSet()

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the registry.

        Args:
            logger: Logger the bridge handler is attached to (root by default)
        """
        self._targets: list[LogTarget] = []
        self._lock = threading.RLock()
        self._tasks: set[asyncio.Task[Any]] = set()
        self._futures: set[concurrent.futures.Future[Any]] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._logger = logger if logger is not None else logging.getLogger()
        self.handler = RegistryHandler(self)
        TargetRegistry._instances.add(self)

    @classmethod
    def live(cls) -> list[TargetRegistry]:
        """Registries that have not been garbage collected."""
        return list(cls._instances)

    @property
    def targets(self) -> tuple[LogTarget, ...]:
        """Snapshot of the registered targets."""
        with self._lock:
            return tuple(self._targets)

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        with self._lock:
            return len(self._tasks) + len(self._futures)

    def contains(self, target: LogTarget) -> bool:
        with self._lock:
            return any(existing is target for existing in self._targets)

    def register(self, target: LogTarget) -> TargetHandle:
        """Add a target and make sure the bridge handler is attached.

        Args:
            target: Object exposing a ``record(record)`` method

        Returns:
            Handle used to remove the target again
        """
        with self._lock:
            self._targets.append(target)
            self.attach()
        return TargetHandle(self, target)

    def unregister(self, target: LogTarget) -> bool:
        """Remove a target by identity.

        The bridge handler is detached once no targets remain.

        Returns:
            True if the target was registered
        """
        with self._lock:
            for index, existing in enumerate(self._targets):
                if existing is target:
                    del self._targets[index]
                    break
            else:
                return False
            if not self._targets:
                self._logger.removeHandler(self.handler)
        return True

    def attach(self) -> bool:
        """Attach the bridge handler again if targets are registered.

        Returns:
            True if the handler is attached after the call
        """
        with self._lock:
            if not self._targets:
                return False
            if self.handler not in self._logger.handlers:
                self._logger.addHandler(self.handler)
            return True

    def clear(self) -> None:
        """Remove every target."""
        with self._lock:
            self._targets.clear()
            self._logger.removeHandler(self.handler)

    def dispatch(self, record: LogRecord) -> None:
        """Hand a record to every registered target.

        All targets are called even if one of them raises; the first error is
        re-raised afterwards.
        """
        first_error: Exception | None = None
        for target in self.targets:
            try:
                result = target.record(record)
                if asyncio.iscoroutine(result):
                    self._schedule(result)
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def _schedule(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(coro)
            with self._lock:
                self._tasks.add(task)
            task.add_done_callback(self._forget_task)
        else:
            future = asyncio.run_coroutine_threadsafe(coro, self._ensure_loop())
            with self._lock:
                self._futures.add(future)
            future.add_done_callback(self._forget_future)

    def _forget_task(self, task: asyncio.Task[Any]) -> None:
        with self._lock:
            self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            _report_target_error(task.exception())

    def _forget_future(self, future: concurrent.futures.Future[Any]) -> None:
        with self._lock:
            self._futures.discard(future)
        if not future.cancelled() and future.exception() is not None:
            _report_target_error(future.exception())

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None or self._loop.is_closed():
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever,
                    name="lark-log-dispatch",
                    daemon=True,
                )
                thread.start()
                self._loop = loop
                self._thread = thread
            return self._loop

    async def drain(self, timeout: float | None = None) -> bool:
        """Wait for in-flight deliveries started before or during the call.

        Only tasks bound to the current event loop and deliveries running on
        the background loop are awaited.

        Returns:
            True if nothing is left pending
        """
        loop = asyncio.get_running_loop()
        current = asyncio.current_task()
        while True:
            with self._lock:
                waiters: list[asyncio.Future[Any]] = [
                    task for task in self._tasks if task is not current and task.get_loop() is loop
                ]
                waiters.extend(asyncio.wrap_future(future, loop=loop) for future in self._futures)
            if not waiters:
                return True
            _, still_pending = await asyncio.wait(waiters, timeout=timeout)
            if still_pending:
                return False

    def drain_sync(self, timeout: float | None = None) -> bool:
        """Block until deliveries on the background loop have finished.

        Must not be called from the background loop's own thread.

        Returns:
            True if nothing is left pending on the background loop
        """
        with self._lock:
            loop = self._loop
        if loop is None or loop.is_closed():
            return True
        return asyncio.run_coroutine_threadsafe(self.drain(timeout), loop).result()

    def close(self, timeout: float = 5.0) -> None:
        """Stop the background event loop, if one was started."""
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                return
        loop.close()


def _report_target_error(exc: BaseException | None) -> None:
    # Logging here could feed the error straight back into the failing target.
    if exc is None:
        return
    sys.stderr.write("--- Log target error ---\n")
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


default_registry = TargetRegistry()
