from typing import Generic, TypeVar, Optional
import threading


T = TypeVar("T")


class LatestQueue(Generic[T]):
    """
    Thread-safe single-slot channel between workers and one reader.
    Publishing replaces any unread item, so the reader only sees the newest.
    """

    def __init__(self) -> None:
        self._ready = threading.Condition()
        self._slot: Optional[T] = None
        self._filled = False
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._ready:
            return self._closed

    def publish(self, item: T) -> None:
        with self._ready:
            if self._closed:
                return
            self._slot = item
            self._filled = True
            self._ready.notify()

    def close(self) -> None:
        """Stop accepting items. A pending item can still be read once."""
        with self._ready:
            self._closed = True
            self._ready.notify_all()

    def get(self, timeout: Optional[float] = None) -> Optional[T]:
        """Block for the newest item. Returns None once closed and drained."""
        with self._ready:
            if not self._ready.wait_for(lambda: self._filled or self._closed, timeout):
                raise TimeoutError("queue get() timed out")
            if not self._filled:
                return None
            item, self._slot, self._filled = self._slot, None, False
            return item
