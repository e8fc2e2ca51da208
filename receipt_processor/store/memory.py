"""
In-memory receipt store.

Maps receipt ids to the points they scored. Entries are written once on
processing and live only as long as the process does.
"""

import abc
import threading
from typing import Dict, Optional


class ReceiptStore(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def put(self, receipt_id: str, points: int) -> None: ...

    @abc.abstractmethod
    def get(self, receipt_id: str) -> Optional[int]: ...


class MemoryReceiptStore(ReceiptStore):
    """
    Dict-backed store. Request handlers run in a thread pool, so every
    read and write goes through the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._points: Dict[str, int] = {}

    def put(self, receipt_id: str, points: int) -> None:
        with self._lock:
            self._points[receipt_id] = points

    def get(self, receipt_id: str) -> Optional[int]:
        with self._lock:
            return self._points.get(receipt_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._points
