import heapq
import itertools
from concurrent.futures import ThreadPoolExecutor
from enum import IntEnum
from logging import getLogger
from threading import Event, Lock
from typing import Any, Callable

logger = getLogger(__name__)


class Priority(IntEnum):
    """Scheduling priority of an operation; higher values run first."""

    VERY_LOW = -8
    LOW = -4
    NORMAL = 0
    HIGH = 4
    VERY_HIGH = 8


def coerce_priority(value: Any) -> int:
    if isinstance(value, str):
        try:
            return int(Priority[value.upper()])
        except KeyError:
            pass
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Unusable priority {value!r}, using NORMAL")
        return int(Priority.NORMAL)


class Operation:
    """A single unit of work with cooperative cancellation.

    The block receives the operation itself so that long-running work can check
    ``is_cancelled`` between steps.
    """

    def __init__(self, block: Callable[["Operation"], None]) -> None:
        self._block = block
        self._cancelled = Event()
        self._executing = False
        self._finished = Event()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def is_executing(self) -> bool:
        return self._executing

    @property
    def is_finished(self) -> bool:
        return self._finished.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._finished.wait(timeout)

    def run(self) -> None:
        if self.is_cancelled:
            self._finished.set()
            return
        self._executing = True
        try:
            self._block(self)
        finally:
            self._executing = False
            self._finished.set()


class OperationQueue:
    """Serial priority queue backed by a single worker thread.

    Operations added to the queue run one at a time, highest priority first and
    in insertion order within a priority level. Cancelling removes operations
    that have not started and flags the executing one.
    """

    def __init__(self, name: str = "httpresource-queue") -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._heap: list[tuple[int, int, Operation]] = []
        self._counter = itertools.count()
        self._lock = Lock()
        self._current: Operation | None = None
        self._resumed = Event()
        self._resumed.set()

    @property
    def operation_count(self) -> int:
        with self._lock:
            return len(self._heap) + (1 if self._current is not None else 0)

    @property
    def is_suspended(self) -> bool:
        return not self._resumed.is_set()

    def add(self, operation: Operation, priority: Any = Priority.NORMAL) -> None:
        with self._lock:
            heapq.heappush(
                self._heap, (-coerce_priority(priority), next(self._counter), operation)
            )
        self._executor.submit(self._run_next)

    def cancel_all_operations(self) -> None:
        with self._lock:
            operations = [entry[2] for entry in self._heap]
            self._heap.clear()
            if self._current is not None:
                operations.append(self._current)

        for operation in operations:
            operation.cancel()

    def suspend(self) -> None:
        self._resumed.clear()

    def resume(self) -> None:
        self._resumed.set()

    def _run_next(self) -> None:
        self._resumed.wait()

        with self._lock:
            if not self._heap:
                return
            _, _, operation = heapq.heappop(self._heap)
            self._current = operation

        try:
            operation.run()
        except Exception:
            logger.exception("Operation failed")
        finally:
            with self._lock:
                self._current = None
