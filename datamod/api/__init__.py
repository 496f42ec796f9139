"""SQL API contract and the bundled SQLAlchemy implementation."""

from .contract import SqlApi
from .history import HistoryEntry, Operation, QueryHistory
from .keystore import KeyStore
from .sqlalchemy_api import SqlAlchemyApi, create_fixture_engine, normalize_database_url
from .subselect import SubSelect

__all__ = [
    "HistoryEntry",
    "KeyStore",
    "Operation",
    "QueryHistory",
    "SqlAlchemyApi",
    "SqlApi",
    "SubSelect",
    "create_fixture_engine",
    "normalize_database_url",
]
