import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Protocol


class CompletionContext(Protocol):
    """Context on which response handlers are run."""

    def post(self, callback: Callable[[], None]) -> None: ...


class MainQueue:
    """Process-wide serial completion queue.

    Every callback posted here runs on the same dedicated thread, in posting
    order, and never on a network worker thread.
    """

    THREAD_NAME_PREFIX = "httpresource-main"

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix=cls.THREAD_NAME_PREFIX
            )
        return cls._instance

    def post(self, callback: Callable[[], None]) -> None:
        self._executor.submit(callback)

    @classmethod
    def is_current(cls) -> bool:
        return threading.current_thread().name.startswith(cls.THREAD_NAME_PREFIX)


class LoopCompletionContext:
    """Runs callbacks on an asyncio event loop, for async applications."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def post(self, callback: Callable[[], None]) -> None:
        self._loop.call_soon_threadsafe(callback)
