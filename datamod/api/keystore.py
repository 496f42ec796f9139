"""
Key/value state shared between fixture steps.

The API keeps the active record of every table here under
``"<table>.<column>"`` keys; providers also park session snapshots in it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class KeyStore:
    """In-memory keyword store scoped to one API instance."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        """Return the stored value.

        Raises:
            KeyError: If nothing is stored under ``key``
        """
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"No value stored for key '{key}'") from None

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def set_record(self, table: str, row: Mapping[str, Any]) -> None:
        """Make ``row`` the active record of ``table``.

        Keys left over from the previous active record are dropped first so a
        column missing from ``row`` never reports a stale value.
        """
        for key in self.get_record_keys(table):
            del self._values[key]
        for column, value in row.items():
            self._values[f"{table}.{column}"] = value

    def get_record_keys(self, table: str) -> list[str]:
        prefix = f"{table}."
        return [key for key in self._values if key.startswith(prefix)]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
