"""Thread-safe byte progress shared by concurrent archivers."""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Callable

from tqdm import tqdm


class ProgressSink:
    """Single owner of the run's byte counter and progress bar.

    Workers only call :meth:`advance`; updates are serialized by one lock so
    the bar is never redrawn by two threads at once.
    """

    def __init__(self, total_bytes: int, *, enabled: bool = True, desc: str = "Compressing") -> None:
        self._lock = threading.Lock()
        self._bytes_done = 0
        self._current: str | None = None
        self._bar = tqdm(
            total=total_bytes,
            desc=desc,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            disable=not enabled,
            leave=False,
        )

    @property
    def bytes_done(self) -> int:
        with self._lock:
            return self._bytes_done

    def advance(self, byte_count: int, file_name: str | None = None) -> None:
        with self._lock:
            self._bytes_done += byte_count
            if file_name is not None and file_name != self._current:
                self._current = file_name
                self._bar.set_postfix_str(file_name, refresh=False)
            self._bar.update(byte_count)

    def callback_for(self, file_name: str) -> Callable[[int], None]:
        """Return a per-file progress callback bound to this sink."""

        def _on_progress(byte_count: int) -> None:
            self.advance(byte_count, file_name)

        return _on_progress

    def close(self) -> None:
        with self._lock:
            self._bar.close()

    def __enter__(self) -> "ProgressSink":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
