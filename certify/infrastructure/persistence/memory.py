from typing import Dict, List, Optional

from ...domain.ports.persistence import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)

    def close(self) -> None:
        pass
