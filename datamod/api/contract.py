"""
Capability contract for the SQL API that providers delegate to.

Providers never talk to a database themselves. Anything that satisfies
``SqlApi`` can be injected: the bundled ``SqlAlchemyApi``, a wrapper around a
project's own test database helper, or an in-memory fake in unit tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from datamod.api.history import QueryHistory
from datamod.api.subselect import SubSelect


@runtime_checkable
class SqlApi(Protocol):
    """What a provider needs from its database API.

    Table and column names passed in are physical names; field-name mapping
    has already happened. Values and where-conditions may contain
    ``SubSelect`` instances which the API resolves inside the statement.

    The API owns the notion of an "active record" per table: after a
    successful insert or select, each column of the row is available from
    the key store under ``"<table>.<column>"``.
    """

    history: QueryHistory

    def insert(self, table: str, values: Mapping[str, Any]) -> Any:
        """Insert a row and make it active. Returns its primary key."""
        ...

    def update(self, table: str, values: Mapping[str, Any], where: Mapping[str, Any]) -> int:
        """Update matching rows. Returns the affected row count."""
        ...

    def delete(self, table: str, where: Mapping[str, Any]) -> int:
        """Delete matching rows. Returns the affected row count."""
        ...

    def truncate(self, table: str) -> None:
        ...

    def select(self, table: str, where: Mapping[str, Any]) -> dict[str, Any] | None:
        """Load the first matching row and make it active."""
        ...

    def sub_select(self, table: str, column: str, where: Mapping[str, Any]) -> SubSelect:
        ...

    def get_key(self, key: str) -> Any:
        """Return stored state; raises KeyError when absent."""
        ...

    def set_key(self, key: str, value: Any) -> None:
        ...

    def has_key(self, key: str) -> bool:
        ...

    def remove_key(self, key: str) -> None:
        ...
