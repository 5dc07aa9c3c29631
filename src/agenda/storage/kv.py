"""Key-value store interface and in-memory implementation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Protocol

ValueKind = Literal["string", "string_set"]


class ValueTypeError(TypeError):
    """A key was read as one value kind while it holds the other."""

    def __init__(self, key: str, expected: ValueKind, actual: ValueKind) -> None:
        super().__init__(f"Key {key!r} holds a {actual}, not a {expected}")
        self.key = key
        self.expected = expected
        self.actual = actual


class KeyValueStore(Protocol):
    def get_string(self, key: str) -> str | None: ...

    def get_string_set(self, key: str) -> frozenset[str] | None: ...

    def put_string(self, key: str, value: str) -> None: ...

    def put_string_set(self, key: str, values: Iterable[str]) -> None: ...

    def contains(self, key: str) -> bool: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._values: dict[str, tuple[ValueKind, str | frozenset[str]]] = {}

    def get_string(self, key: str) -> str | None:
        entry = self._values.get(key)
        if entry is None:
            return None
        kind, value = entry
        if kind != "string":
            raise ValueTypeError(key, "string", kind)
        return str(value)

    def get_string_set(self, key: str) -> frozenset[str] | None:
        entry = self._values.get(key)
        if entry is None:
            return None
        kind, value = entry
        if kind != "string_set" or not isinstance(value, frozenset):
            raise ValueTypeError(key, "string_set", kind)
        return value

    def put_string(self, key: str, value: str) -> None:
        self._values[key] = ("string", value)

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        self._values[key] = ("string_set", frozenset(values))

    def contains(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()
