"""
Built-in type handlers.

Each handler converts one Python value type to the representation handed to a DB-API
cursor and back. None is passed through unchanged in both directions.
"""

import datetime
import decimal
from enum import Enum
from typing import Any, List

from .annotations import mapped_jdbc_types, mapped_types
from ..interfaces import TypeHandler
from ..models import JdbcType


class BaseTypeHandler(TypeHandler):
    """Handles None; subclasses implement the non-null conversions."""

    def set_parameter(self, parameters: List[Any], index: int, value: Any, jdbc_type: Any = None) -> None:
        if value is None:
            parameters[index] = None
        else:
            parameters[index] = self.to_database(value, jdbc_type)

    def get_result(self, row: Any, column: Any) -> Any:
        value = row[column] if isinstance(column, int) else getattr(row, column)
        if value is None:
            return None
        return self.from_database(value)

    def to_database(self, value: Any, jdbc_type: Any = None) -> Any:
        return value

    def from_database(self, value: Any) -> Any:
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@mapped_types(str)
class StringTypeHandler(BaseTypeHandler):
    def to_database(self, value, jdbc_type=None):
        return str(value)

    def from_database(self, value):
        return value if isinstance(value, str) else str(value)


@mapped_types(int)
class IntegerTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        return int(value)


@mapped_types(float)
class FloatTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        return float(value)


@mapped_types(bool)
class BooleanTypeHandler(BaseTypeHandler):
    def to_database(self, value, jdbc_type=None):
        # BIT columns take 0/1 on most ODBC drivers
        if jdbc_type in (JdbcType.BIT, JdbcType.TINYINT, JdbcType.SMALLINT, JdbcType.INTEGER):
            return 1 if value else 0
        return bool(value)

    def from_database(self, value):
        if isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'y', 'yes')
        return bool(value)


@mapped_types(decimal.Decimal)
class DecimalTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        return value if isinstance(value, decimal.Decimal) else decimal.Decimal(str(value))


@mapped_types(bytes)
class BytesTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        return bytes(value)


@mapped_types(datetime.datetime)
class DateTimeTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        if isinstance(value, str):
            return datetime.datetime.fromisoformat(value)
        return value


@mapped_types(datetime.date)
class DateTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str):
            return datetime.date.fromisoformat(value)
        return value


@mapped_types(datetime.time)
class TimeTypeHandler(BaseTypeHandler):
    def from_database(self, value):
        if isinstance(value, datetime.datetime):
            return value.time()
        if isinstance(value, str):
            return datetime.time.fromisoformat(value)
        return value


@mapped_jdbc_types(JdbcType.TIMESTAMP)
class SqlTimestampTypeHandler(DateTimeTypeHandler):
    """Registered for (date, TIMESTAMP): returns the full datetime instead of truncating."""

    def from_database(self, value):
        if isinstance(value, str):
            return datetime.datetime.fromisoformat(value)
        return value


@mapped_types(object)
class ObjectTypeHandler(BaseTypeHandler):
    """Pass-through handler for values of unknown type."""


class EnumTypeHandler(BaseTypeHandler):
    """Stores an Enum member by name."""

    def __init__(self, enum_type: type):
        if enum_type is None:
            raise ValueError("Type argument cannot be null")
        self.enum_type = enum_type

    def to_database(self, value, jdbc_type=None):
        return value.name

    def from_database(self, value):
        try:
            return self.enum_type[value]
        except KeyError as e:
            raise ValueError(f"Cannot convert {value!r} to {self.enum_type.__name__} by name") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.enum_type.__name__})"


class EnumOrdinalTypeHandler(EnumTypeHandler):
    """Stores an Enum member by its position in the enum."""

    def __init__(self, enum_type: type):
        super().__init__(enum_type)
        self._members = list(enum_type)

    def to_database(self, value, jdbc_type=None):
        return self._members.index(value)

    def from_database(self, value):
        try:
            return self._members[int(value)]
        except (IndexError, ValueError) as e:
            raise ValueError(f"Cannot convert {value!r} to {self.enum_type.__name__} by ordinal value") from e


def is_enum_type(type_: Any) -> bool:
    return isinstance(type_, type) and issubclass(type_, Enum) and type_ is not Enum
