"""
Placeholder values for NOT NULL columns a fixture did not mention.

Values are derived from a per-process counter so they are unique within a
run and readable in failure output (``FIXTURE_name_0003``).
"""

from __future__ import annotations

import decimal
import itertools
import uuid
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from sqlalchemy import Column
from sqlalchemy import types as sqltypes

_counter = itertools.count(1)


def next_sequence() -> int:
    return next(_counter)


def column_needs_value(column: Column) -> bool:
    """True when an insert without this column would violate NOT NULL."""
    if column.nullable:
        return False
    if column.default is not None or column.server_default is not None:
        return False
    if column.primary_key and column.autoincrement in (True, "auto"):
        # Integer primary keys are assigned by the database
        if isinstance(column.type, sqltypes.Integer):
            return False
    return True


def generate_value(column: Column) -> Any:
    """Build a value acceptable to ``column``'s type."""
    seq = next_sequence()
    col_type = column.type

    enums = getattr(col_type, "enums", None)
    if enums:
        return enums[0]

    if isinstance(col_type, sqltypes.Boolean):
        return False
    if isinstance(col_type, sqltypes.Integer):
        return seq
    if isinstance(col_type, sqltypes.Numeric):
        return decimal.Decimal(seq)
    if isinstance(col_type, sqltypes.DateTime):
        return datetime.now(UTC).replace(microsecond=0)
    if isinstance(col_type, sqltypes.Date):
        return date.today()
    if isinstance(col_type, sqltypes.Time):
        return time(0, 0)
    if isinstance(col_type, sqltypes.Interval):
        return timedelta(0)
    if isinstance(col_type, sqltypes.Uuid):
        return uuid.uuid5(uuid.NAMESPACE_DNS, f"datamod-fixture-{seq}")
    if isinstance(col_type, sqltypes.JSON):
        return {}
    if isinstance(col_type, sqltypes.LargeBinary):
        return b""
    if isinstance(col_type, sqltypes.String):
        value = f"FIXTURE_{column.name}_{seq:04d}"
        length = getattr(col_type, "length", None)
        return value[-length:] if length else value

    raise TypeError(
        f"Cannot generate a value for column '{column.name}' of type {col_type!r}; "
        "pass it explicitly in the fixture data"
    )
