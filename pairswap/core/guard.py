"""
Scoped mutual-exclusion guard for pair operations.

Acquisition never blocks: a second entry, whether re-entrant from a ledger
call or from another thread, fails immediately with `Locked`.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from .errors import Locked


class ReentrancyGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Hold the guard for the body of a `with` block; released on every exit path."""
        if not self._lock.acquire(blocking=False):
            raise Locked()
        try:
            yield
        finally:
            self._lock.release()
