"""Loading indicators for in-flight API calls."""

import threading
from collections import Counter
from typing import Hashable, Optional, Set


class LoadingState:
    """Counts in-flight requests per ``(resource, id)`` key.

    ``start`` before dispatch and ``end`` in a ``finally`` block, so two
    concurrent loads of different students never clear each other's flag.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._active: Counter = Counter()
        self._requests: Set[str] = set()

    def start(
        self,
        resource: str,
        resource_id: Optional[Hashable] = None,
        request_id: Optional[str] = None,
    ) -> None:
        with self._lock:
            self._active[(resource, resource_id)] += 1
            if request_id:
                self._requests.add(request_id)

    def end(
        self,
        resource: str,
        resource_id: Optional[Hashable] = None,
        request_id: Optional[str] = None,
    ) -> None:
        with self._lock:
            key = (resource, resource_id)
            if self._active[key] <= 1:
                del self._active[key]
            else:
                self._active[key] -= 1
            if request_id:
                self._requests.discard(request_id)

    def is_loading(self) -> bool:
        """True while any request is in flight."""
        with self._lock:
            return bool(self._active)

    def is_resource_loading(
        self, resource: str, resource_id: Optional[Hashable] = None
    ) -> bool:
        """True while ``resource`` (or one of its ids, when no id is given) loads."""
        with self._lock:
            if resource_id is not None:
                return self._active[(resource, resource_id)] > 0
            return any(name == resource for name, _ in self._active)

    def is_request_loading(self, request_id: str) -> bool:
        with self._lock:
            return request_id in self._requests

    def reset_all(self) -> None:
        with self._lock:
            self._active.clear()
            self._requests.clear()
