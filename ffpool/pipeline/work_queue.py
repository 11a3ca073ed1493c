import threading
from pathlib import Path
from typing import Iterable, List, Optional


class WorkQueue:
    """Fixed pool of input paths shared by all workers.

    Filled once at construction; `take` is the only mutator. The lock is held
    for a single pop, never while a job runs.
    """

    def __init__(self, paths: Iterable[Path]):
        self._paths: List[Path] = list(paths)
        self._initial_count = len(self._paths)
        self._lock = threading.Lock()

    @property
    def initial_count(self) -> int:
        return self._initial_count

    @property
    def remaining(self) -> int:
        with self._lock:
            return len(self._paths)

    def take(self) -> Optional[Path]:
        """Removes and returns one path, or None once the queue is drained."""
        with self._lock:
            if not self._paths:
                return None
            return self._paths.pop()
