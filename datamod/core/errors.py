"""
Domain-specific exceptions for datamod.

These exceptions represent caller errors in fixture code (bad field names,
missing step data, unpaired session calls). Errors raised by the underlying
database API are never wrapped; they propagate unchanged.
"""

from typing import Any


class DataModError(Exception):
    """Base exception for all datamod errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class MappingDefinitionError(DataModError):
    """
    Raised when a DataMod class declares an unusable mapping.

    Examples:
    - get_base_table() returns an empty name
    - Mapping key or column name is not a non-empty string
    """

    pass


class UnmappedFieldError(DataModError, KeyError):
    """
    Raised when a semantic field name has no column in the entity mapping.

    Examples:
    - get_field_mapping("nmae") on a mapping that only knows "name"
    - create_fixture() data containing an unknown key
    """

    pass


class MissingKeyError(DataModError, KeyError):
    """
    Raised when required step data is absent.

    Examples:
    - get_required_data({}, "email")
    """

    pass


class InvalidUniqueColumnError(DataModError):
    """
    Raised when create_fixture() is asked to recreate on an unusable column.

    Examples:
    - unique_column not present in the mapping
    - unique_column present in the mapping but missing from the data
    """

    pass


class NoActiveRecordError(DataModError):
    """
    Raised when a value is requested before any record is active.

    Examples:
    - get_value("id") before create_fixture() or select()
    """

    pass


class SessionStateError(DataModError):
    """
    Raised when save_session()/restore_session() are not paired.

    Examples:
    - save_session() twice without restore_session()
    - restore_session() without a prior save_session()
    """

    pass


class UnknownEntityError(DataModError):
    """Raised when a DataMod name cannot be resolved from the registry."""

    pass


class SubSelectResolutionError(DataModError):
    """
    Raised by the bundled API when a sub-select matches nothing.

    Examples:
    - sub_select("Status", "id", {"name": "missing"}) used as an update value
    """

    pass
