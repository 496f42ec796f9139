"""Deferred sub-select fragments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class SubSelect:
    """A ``SELECT column FROM table WHERE ...`` that is embedded, not executed.

    Instances are plain values: place one in the values or where-conditions
    of an insert/update/delete and the API resolves it inside the parent
    statement.
    """

    table: str
    column: str
    where: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.table or not self.column:
            raise ValueError("SubSelect requires both a table and a column")
        object.__setattr__(self, "where", MappingProxyType(dict(self.where)))

    def __str__(self) -> str:
        conditions = ",".join(f"{key}:{value}" for key, value in self.where.items())
        return f"[{self.table}.{self.column}|{conditions}]"

    def __hash__(self) -> int:
        return hash(str(self))
