"""
Entity fixture providers.

A DataMod describes one database entity: its table and the friendly field
names step definitions use for its columns. Every fixture operation maps
those names to columns and hands the work to the injected SQL API.

Usage:
    class User(DataMod):
        @classmethod
        def get_base_table(cls) -> str:
            return "user"

        @classmethod
        def get_data_mapping(cls) -> dict[str, str]:
            return {"id": "id", "email": "email_address", "status": "status_id"}

    user = User(api)
    user.create_fixture({"email": "its@example.com"}, unique_column="email")
    user.get_value("id")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from datamod import registry
from datamod.api.contract import SqlApi
from datamod.api.subselect import SubSelect
from datamod.core.config import get_settings
from datamod.core.errors import (
    InvalidUniqueColumnError,
    MappingDefinitionError,
    MissingKeyError,
    NoActiveRecordError,
    SessionStateError,
    UnmappedFieldError,
)

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "__session__."


class BaseProvider:
    """Generic, entity-agnostic fixture operations.

    Subclasses supply ``get_base_table()`` and ``get_data_mapping()``.
    """

    # Semantic field seed rows are recreated on, if any
    seed_unique_field: str | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "get_base_table" in cls.__dict__:
            registry.register_entity(cls)

    def __init__(self, api: SqlApi, *, seed: bool | None = None):
        self.api = api
        self.table = self.get_base_table()
        self.mapping = self.field_mapping()

        if seed is None:
            seed = get_settings().seed_on_init
        if seed:
            self.insert_seed_data_if_exists()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} table={self.table!r}>"

    # ------------------------------------------------------------------
    # Entity definition
    # ------------------------------------------------------------------

    @classmethod
    def get_base_table(cls) -> str:
        raise NotImplementedError(f"{cls.__name__} must define get_base_table()")

    @classmethod
    def get_data_mapping(cls) -> Mapping[str, str]:
        raise NotImplementedError(f"{cls.__name__} must define get_data_mapping()")

    @classmethod
    def get_seed_data(cls) -> list[dict[str, Any]] | None:
        """Rows inserted whenever the provider is constructed. None by default."""
        return None

    @classmethod
    def field_mapping(cls) -> Mapping[str, str]:
        """
        Return the validated, read-only field mapping of this entity.

        Validation runs once per class.

        Raises:
            MappingDefinitionError: If the table name or any mapping entry is
                not a non-empty string
        """
        cached = cls.__dict__.get("_validated_mapping")
        if cached is not None:
            return cached

        table = cls.get_base_table()
        if not isinstance(table, str) or not table.strip():
            raise MappingDefinitionError(
                f"{cls.__name__}.get_base_table() must return a table name",
                details={"entity": cls.__name__, "table": table},
            )

        mapping = cls.get_data_mapping()
        for field_name, column in mapping.items():
            if not isinstance(field_name, str) or not field_name:
                raise MappingDefinitionError(
                    f"{cls.__name__} mapping has an invalid field name: {field_name!r}",
                    details={"entity": cls.__name__},
                )
            if not isinstance(column, str) or not column:
                raise MappingDefinitionError(
                    f"{cls.__name__} field '{field_name}' maps to an invalid column: {column!r}",
                    details={"entity": cls.__name__, "field": field_name},
                )

        cached = MappingProxyType(dict(mapping))
        cls._validated_mapping = cached
        return cached

    @classmethod
    def get_field_mapping(cls, key: str) -> str:
        """
        Return the column behind a semantic field name.

        Raises:
            UnmappedFieldError: If ``key`` is not in the mapping
        """
        mapping = cls.field_mapping()
        try:
            return mapping[key]
        except KeyError:
            raise UnmappedFieldError(
                f"Field '{key}' is not mapped for {cls.__name__}",
                details={"entity": cls.__name__, "field": key, "known": sorted(mapping)},
            ) from None

    @classmethod
    def map_data(cls, data: Mapping[str, Any] | None) -> dict[str, Any]:
        """Translate semantic keys of ``data`` to column names. Values pass through."""
        return {cls.get_field_mapping(key): value for key, value in (data or {}).items()}

    @classmethod
    def unmap_row(cls, row: Mapping[str, Any]) -> dict[str, Any]:
        """Translate a column-keyed row back to semantic field names."""
        mapping = cls.field_mapping()
        return {field: row[column] for field, column in mapping.items() if column in row}

    # ------------------------------------------------------------------
    # Step data helpers
    # ------------------------------------------------------------------

    @staticmethod
    def get_required_data(data: Mapping[str, Any], key: str) -> Any:
        """
        Return ``data[key]``.

        Raises:
            MissingKeyError: If ``key`` is absent
        """
        if key not in data:
            raise MissingKeyError(
                f"Required data '{key}' is missing",
                details={"key": key, "available": sorted(map(str, data))},
            )
        return data[key]

    @staticmethod
    def get_optional_data(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
        return data[key] if key in data else default

    # ------------------------------------------------------------------
    # Fixture operations
    # ------------------------------------------------------------------

    def insert_seed_data_if_exists(self) -> int:
        """
        Insert the entity's seed rows, if it declares any.

        Rows containing ``seed_unique_field`` are only inserted when no row
        with that value exists yet, so existing rows keep their keys and
        anything referencing them stays valid. The active record is left
        as it was before seeding.

        Returns:
            Number of rows inserted
        """
        rows = self.get_seed_data()
        if not rows:
            return 0

        snapshot = self._snapshot_active_record()
        inserted = 0
        try:
            for row in rows:
                if self.seed_unique_field is not None and self.seed_unique_field in row:
                    column = self.get_field_mapping(self.seed_unique_field)
                    existing = self.api.select(self.table, {column: row[self.seed_unique_field]})
                    if existing is not None:
                        continue
                self.api.insert(self.table, self.map_data(row))
                inserted += 1
        finally:
            self._restore_active_record(snapshot)

        if inserted:
            logger.info("Seeded %d row(s) into %s", inserted, self.table)
        return inserted

    def _snapshot_active_record(self) -> dict[str, Any]:
        """Return the mapped columns of the active record currently in the key store."""
        snapshot = {}
        for column in set(self.mapping.values()):
            key = f"{self.table}.{column}"
            if self.api.has_key(key):
                snapshot[column] = self.api.get_key(key)
        return snapshot

    def _restore_active_record(self, snapshot: Mapping[str, Any]) -> None:
        for column in set(self.mapping.values()):
            key = f"{self.table}.{column}"
            if column in snapshot:
                self.api.set_key(key, snapshot[column])
            elif self.api.has_key(key):
                self.api.remove_key(key)

    def create_fixture(
        self, data: Mapping[str, Any] | None = None, unique_column: str | None = None
    ) -> Any:
        """
        Create a fresh record for this entity and make it the active one.

        Fields not given are left to the API, which generates values for
        NOT NULL columns and leaves the rest NULL.

        Args:
            data: Semantic field values; values may be SubSelect fragments
            unique_column: Semantic field identifying the record; any existing
                row with the same value is deleted before inserting

        Returns:
            Primary key of the inserted record, as reported by the API

        Raises:
            InvalidUniqueColumnError: If unique_column is unmapped or absent from data
            UnmappedFieldError: If data contains an unmapped field
        """
        data = dict(data or {})

        if unique_column is not None:
            if unique_column not in self.mapping:
                raise InvalidUniqueColumnError(
                    f"Unique column '{unique_column}' is not mapped for {type(self).__name__}",
                    details={"entity": type(self).__name__, "field": unique_column},
                )
            if unique_column not in data:
                raise InvalidUniqueColumnError(
                    f"Unique column '{unique_column}' has no value in the fixture data",
                    details={"entity": type(self).__name__, "field": unique_column},
                )

        columns = self.map_data(data)

        if unique_column is not None:
            column = self.mapping[unique_column]
            removed = self.api.delete(self.table, {column: columns[column]})
            if removed:
                logger.debug(
                    "Removed %d existing row(s) from %s before recreating",
                    removed,
                    self.table,
                    extra={"column": column},
                )

        primary_key = self.api.insert(self.table, columns)
        logger.debug("Created %s fixture", type(self).__name__, extra={"primary_key": primary_key})
        return primary_key

    def get_value(self, key: str) -> Any:
        """
        Return a field of the active record.

        Raises:
            UnmappedFieldError: If ``key`` is not mapped
            NoActiveRecordError: If no record of this entity is active
        """
        column = self.get_field_mapping(key)
        store_key = f"{self.table}.{column}"
        if not self.api.has_key(store_key):
            raise NoActiveRecordError(
                f"No active {type(self).__name__} record to read '{key}' from",
                details={"entity": type(self).__name__, "field": key},
            )
        return self.api.get_key(store_key)

    def select(self, where: Mapping[str, Any]) -> dict[str, Any] | None:
        """Load the first matching record, make it active and return it by field name."""
        row = self.api.select(self.table, self.map_data(where))
        if row is None:
            return None
        return self.unmap_row(row)

    def update(self, values: Mapping[str, Any], where: Mapping[str, Any]) -> int:
        return self.api.update(self.table, self.map_data(values), self.map_data(where))

    def delete(self, where: Mapping[str, Any]) -> int:
        return self.api.delete(self.table, self.map_data(where))

    def truncate(self) -> None:
        self.api.truncate(self.table)
        logger.info("Truncated %s", type(self).__name__)

    def sub_select(
        self,
        table: str | type[BaseProvider],
        column: str,
        where: Mapping[str, Any] | None = None,
    ) -> SubSelect:
        """
        Build a deferred sub-select for use inside another operation.

        ``table`` may be a DataMod class, the name of a registered DataMod,
        or a plain table name. For DataMods the column and where-keys are
        semantic field names of that entity and get mapped; for plain tables
        they are used as given.

        Returns:
            SubSelect fragment; nothing is executed
        """
        entity: type[BaseProvider] | None
        if isinstance(table, type) and issubclass(table, BaseProvider):
            entity = table
        else:
            entity = registry.find_entity(table)

        if entity is None:
            return self.api.sub_select(table, column, dict(where or {}))

        return self.api.sub_select(
            entity.get_base_table(),
            entity.get_field_mapping(column),
            entity.map_data(where),
        )

    # ------------------------------------------------------------------
    # Session snapshot
    # ------------------------------------------------------------------

    @property
    def session_key(self) -> str:
        return f"{SESSION_KEY_PREFIX}{type(self).__name__}"

    def has_saved_session(self) -> bool:
        return self.api.has_key(self.session_key)

    def save_session(self, primary_key: str) -> Any:
        """
        Remember the active record so it can be brought back later.

        Args:
            primary_key: Semantic field identifying the record (usually "id")

        Returns:
            The saved key value

        Raises:
            SessionStateError: If a session is already saved for this entity
            NoActiveRecordError: If there is no active record to save
        """
        if self.has_saved_session():
            raise SessionStateError(
                f"A {type(self).__name__} session is already saved; restore it first",
                details={"entity": type(self).__name__},
            )

        value = self.get_value(primary_key)
        self.api.set_key(self.session_key, (primary_key, value))
        logger.debug("Saved %s session", type(self).__name__, extra={"key": value})
        return value

    def restore_session(self) -> Any:
        """
        Make the record captured by save_session() active again.

        The saved slot is cleared even when the record no longer exists.

        Returns:
            The restored key value

        Raises:
            SessionStateError: If no session was saved
            NoActiveRecordError: If the saved record has been deleted since
        """
        if not self.has_saved_session():
            raise SessionStateError(
                f"No {type(self).__name__} session to restore",
                details={"entity": type(self).__name__},
            )

        primary_key, value = self.api.get_key(self.session_key)
        self.api.remove_key(self.session_key)

        row = self.api.select(self.table, {self.get_field_mapping(primary_key): value})
        if row is None:
            raise NoActiveRecordError(
                f"Saved {type(self).__name__} record {value!r} no longer exists",
                details={"entity": type(self).__name__, "field": primary_key, "value": value},
            )

        logger.debug("Restored %s session", type(self).__name__, extra={"key": value})
        return value


class DataMod(BaseProvider):
    """Base class for per-entity fixture definitions.

    Subclasses defining ``get_base_table()`` are registered by class name.
    """
