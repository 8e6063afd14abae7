"""Global settings store with dotted-path access.

The host application keeps one ``Settings`` instance as its ambient
configuration. Keys are dotted paths (``"admin.route.domain"``) or
sequences of segments (``("admin", "route", "domain")``) that descend
nested mappings.

Thread safety:
    Reads and writes take an ``RLock``. Values handed out are the stored
    objects themselves, not copies.
"""

import threading
from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from typing import Any, TypeAlias

Key: TypeAlias = str | Sequence[str]

_MISSING = object()


def _segments(key: Key) -> list[str]:
    if isinstance(key, str):
        return key.split(".")
    return [str(part) for part in key]


def data_get(target: Any, key: Key | None, default: Any = None) -> Any:
    """Look up *key* inside nested mappings.

    A ``None`` key returns *target* itself. A literal key containing dots
    is honoured before the path is split. Any missing segment, or a
    segment landing on a non-mapping, returns *default*.
    """
    if key is None:
        return target
    if not isinstance(target, Mapping):
        return default
    if isinstance(key, str) and key in target:
        return target[key]

    current: Any = target
    for segment in _segments(key):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]
    return current


def data_set(target: MutableMapping[str, Any], key: Key, value: Any) -> None:
    """Write *value* at *key*, creating intermediate dicts as needed.

    An intermediate value that is not a mapping is replaced by a new dict.
    """
    *parents, last = _segments(key)
    current = target
    for segment in parents:
        child = current.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            current[segment] = child
        current = child
    current[last] = value


class Settings:
    """Mutable key-value settings with dotted-path semantics.

    Usage::

        settings = Settings({"admin": {"route": {"prefix": "admin"}}})
        settings.get("admin.route.prefix")        # "admin"
        settings.set("tenant.route.domain", "t.example.com")
        settings.get("missing.key", "fallback")   # "fallback"
    """

    __slots__ = ("_data", "_lock")

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._lock = threading.RLock()
        if initial:
            self.update(initial)

    def get(self, key: Key | None, default: Any = None) -> Any:
        """Return the value at *key*, or *default* when any segment is absent."""
        with self._lock:
            return data_get(self._data, key, default)

    def set(self, key: Key, value: Any) -> None:
        """Write *value* at *key*."""
        with self._lock:
            data_set(self._data, key, value)

    def update(self, values: Mapping[str, Any]) -> None:
        """Set every top-level item of *values*."""
        with self._lock:
            for key, value in values.items():
                data_set(self._data, key, value)

    def has(self, key: Key) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the top-level store."""
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __repr__(self) -> str:
        return f"<Settings keys={sorted(self.to_dict())!r}>"
