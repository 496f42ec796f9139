"""
Per-entity fixture helpers for database-backed acceptance tests.

This library provides:
- DataMod base class mapping friendly field names to table columns
- Fixture operations (create, update, truncate, sub-select, session save/restore)
- The SqlApi contract every operation delegates to
- SqlAlchemyApi, a ready implementation of that contract
"""

from .api import KeyStore, QueryHistory, SqlAlchemyApi, SqlApi, SubSelect
from .core.errors import (
    DataModError,
    InvalidUniqueColumnError,
    MappingDefinitionError,
    MissingKeyError,
    NoActiveRecordError,
    SessionStateError,
    SubSelectResolutionError,
    UnknownEntityError,
    UnmappedFieldError,
)
from .provider import BaseProvider, DataMod

__version__ = "0.1.0"

__all__ = [
    "BaseProvider",
    "DataMod",
    "DataModError",
    "InvalidUniqueColumnError",
    "KeyStore",
    "MappingDefinitionError",
    "MissingKeyError",
    "NoActiveRecordError",
    "QueryHistory",
    "SessionStateError",
    "SqlAlchemyApi",
    "SqlApi",
    "SubSelect",
    "SubSelectResolutionError",
    "UnknownEntityError",
    "UnmappedFieldError",
]
