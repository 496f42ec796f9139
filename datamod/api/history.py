"""
Query history for fixture APIs.

Every statement an API executes is recorded so a scenario can inspect what
happened, replay it, or clean up the rows it inserted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Statement kinds tracked in the history."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    TRUNCATE = "truncate"
    SELECT = "select"


@dataclass(frozen=True)
class HistoryEntry:
    """One executed statement."""

    operation: Operation
    table: str
    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    primary_key: Any = None
    rowcount: int | None = None
    executed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    statement: Any = field(default=None, repr=False, compare=False)


class QueryHistory:
    """Ordered record of executed statements."""

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def record(self, entry: HistoryEntry) -> HistoryEntry:
        self._entries.append(entry)
        logger.debug(
            "Recorded %s on %s",
            entry.operation.value,
            entry.table,
            extra={"sql": entry.sql, "primary_key": entry.primary_key},
        )
        return entry

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def for_operation(self, operation: Operation | str) -> list[HistoryEntry]:
        op = Operation(operation)
        return [entry for entry in self._entries if entry.operation == op]

    def inserted(self, table: str | None = None) -> list[HistoryEntry]:
        """Insert entries, optionally limited to one table."""
        return [
            entry
            for entry in self.for_operation(Operation.INSERT)
            if table is None or entry.table == table
        ]

    def last(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def replay(self, executor: Callable[[HistoryEntry], Any]) -> int:
        """Feed every recorded entry, oldest first, to ``executor``.

        The history is snapshotted first so an executor that records new
        entries does not replay them as well.

        Returns:
            Number of entries replayed
        """
        snapshot = list(self._entries)
        for entry in snapshot:
            executor(entry)
        return len(snapshot)

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
