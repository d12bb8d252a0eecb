"""
Core data models for the SQL map configuration system.

This module defines the enumerations used by the settings section and the
immutable value objects produced during configuration assembly.
"""

from dataclasses import dataclass
from typing import Any, Optional
from enum import Enum


class AutoMappingBehavior(Enum):
    """How result columns are mapped to properties when no explicit mapping exists."""
    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"


class AutoMappingUnknownColumnBehavior(Enum):
    """What happens when auto-mapping meets a column with no matching property."""
    NONE = "NONE"
    WARNING = "WARNING"
    FAILING = "FAILING"


class ExecutorType(Enum):
    """Statement executor flavour used by sessions."""
    SIMPLE = "SIMPLE"
    REUSE = "REUSE"
    BATCH = "BATCH"


class LocalCacheScope(Enum):
    """Lifetime of the per-session local cache."""
    SESSION = "SESSION"
    STATEMENT = "STATEMENT"


class SqlCommandType(Enum):
    """Kind of statement declared in a mapper document."""
    UNKNOWN = "UNKNOWN"
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class JdbcType(Enum):
    """Database column type codes, keyed the same way as the JDBC java.sql.Types constants."""
    ARRAY = 2003
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    NULL = 0
    OTHER = 1111
    BLOB = 2004
    CLOB = 2005
    BOOLEAN = 16
    CURSOR = -10
    UNDEFINED = -2147482648
    NVARCHAR = -9
    NCHAR = -15
    NCLOB = 2011
    STRUCT = 2002
    JAVA_OBJECT = 2000
    DISTINCT = 2001
    REF = 2006
    DATALINK = 70
    ROWID = -8
    LONGNVARCHAR = -16
    SQLXML = 2009
    DATETIMEOFFSET = -155
    TIME_WITH_TIMEZONE = 2013
    TIMESTAMP_WITH_TIMEZONE = 2014

    @classmethod
    def for_code(cls, code: int) -> 'JdbcType':
        """Look up a JdbcType by its numeric code."""
        return cls(code)


@dataclass(frozen=True)
class Environment:
    """
    A named pairing of a transaction strategy and a data source.

    Exactly one Environment is active per built Configuration. Instances are
    constructed once during assembly and never mutated afterward.

    Attributes:
        id: Environment identifier from the document (e.g. "dev", "prod")
        transaction_factory: Factory producing transactions for this environment
        data_source: Realised data source built by the environment's DataSourceFactory
    """
    id: str
    transaction_factory: Any
    data_source: Any

    def __post_init__(self):
        """Validate environment completeness."""
        if not self.id:
            raise ValueError("Environment id cannot be empty")
        if self.transaction_factory is None:
            raise ValueError("Environment requires a transaction factory")
        if self.data_source is None:
            raise ValueError("Environment requires a data source")


@dataclass(frozen=True)
class MappedStatement:
    """
    A statement declared in a mapper document.

    Attributes:
        id: Fully qualified statement id (namespace.id)
        command_type: SELECT, INSERT, UPDATE or DELETE
        sql: Statement body with <include> references expanded
        database_id: Vendor id the statement is restricted to, if any
        resource: Mapper resource the statement came from
        result_type: Optional result type resolved from the resultType attribute
        parameter_type: Optional parameter type resolved from the parameterType attribute
    """
    id: str
    command_type: SqlCommandType
    sql: str
    database_id: Optional[str] = None
    resource: Optional[str] = None
    result_type: Optional[type] = None
    parameter_type: Optional[type] = None
