"""
In-memory store adapter - Implements DomainStore protocol.

For development and tests. Contents live for the life of the process.
"""

import threading


class InMemoryDomainStore:
    """
    Implements DomainStore protocol with a lock-guarded dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def put_if_absent(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def ping(self) -> None:
        pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
