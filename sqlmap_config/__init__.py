"""
SQL Map Configuration

Assembles an XML configuration document into a validated, fully wired Configuration
object for a SQL-mapping data-access layer: substitution variables, settings, type
aliases, interceptors, environments, vendor ids, type handlers and mappers.
"""

__version__ = "1.0.0"

# Import core models and interfaces for easy access
from .models import (
    AutoMappingBehavior,
    AutoMappingUnknownColumnBehavior,
    Environment,
    ExecutorType,
    JdbcType,
    LocalCacheScope,
    MappedStatement,
    SqlCommandType,
)

from .interfaces import (
    DatabaseIdProvider,
    DataSourceFactory,
    Interceptor,
    ObjectFactory,
    TransactionFactory,
    TypeHandler,
)

from .exceptions import (
    SqlMapConfigError,
    TypeResolutionError,
    InstantiationError,
    UnknownAliasError,
    UnknownSettingError,
    AliasRegistrationError,
    MapperElementError,
    NoEnvironmentSpecifiedError,
    MissingEnvironmentIdError,
    AlreadyParsedError,
    ConfigurationParseError,
)

from .session import Configuration, DefaultSessionFactory, SessionFactoryBuilder
from .builder import XMLConfigBuilder

__all__ = [
    # Core models
    "AutoMappingBehavior",
    "AutoMappingUnknownColumnBehavior",
    "Environment",
    "ExecutorType",
    "JdbcType",
    "LocalCacheScope",
    "MappedStatement",
    "SqlCommandType",

    # Interfaces
    "DatabaseIdProvider",
    "DataSourceFactory",
    "Interceptor",
    "ObjectFactory",
    "TransactionFactory",
    "TypeHandler",

    # Exceptions
    "SqlMapConfigError",
    "TypeResolutionError",
    "InstantiationError",
    "UnknownAliasError",
    "UnknownSettingError",
    "AliasRegistrationError",
    "MapperElementError",
    "NoEnvironmentSpecifiedError",
    "MissingEnvironmentIdError",
    "AlreadyParsedError",
    "ConfigurationParseError",

    # Entry points
    "Configuration",
    "DefaultSessionFactory",
    "SessionFactoryBuilder",
    "XMLConfigBuilder",
]
