"""
Abstract interfaces for the pluggable strategies of the SQL map configuration system.

Every strategy named by a string in a configuration document (interceptors, factories,
data sources, vendor id providers, type handlers, log adapters, virtual file systems)
implements one of the contracts below. Implementations are built through their
zero-argument constructor and then configured with set_properties().
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional


class Interceptor(ABC):
    """Cross-cutting behaviour wrapped around a target object by the InterceptorChain."""

    # (target type, method name) pairs this interceptor applies to. An empty list
    # intercepts every public method of the target.
    signatures: List[tuple] = []

    @abstractmethod
    def intercept(self, invocation) -> Any:
        """
        Handle an intercepted call.

        Args:
            invocation: Invocation describing the call; invocation.proceed() continues the chain

        Returns:
            The call's result
        """
        pass

    def plugin(self, target: Any) -> Any:
        """Wrap target in a proxy routing matching calls through intercept()."""
        from .plugin.interceptor_chain import Plugin
        return Plugin.wrap(target, self)

    def set_properties(self, properties: Dict[str, str]) -> None:
        """Receive the <property> children declared for the plugin."""
        self.properties = dict(properties)


class ObjectFactory(ABC):
    """Creates result objects for the data-access runtime."""

    def set_properties(self, properties: Dict[str, str]) -> None:
        """Receive the <property> children declared for the factory."""
        pass

    @abstractmethod
    def create(self, type_: type, constructor_args: Optional[List[Any]] = None) -> Any:
        """
        Create a new instance of type_.

        Args:
            type_: Type to instantiate
            constructor_args: Optional positional constructor arguments

        Returns:
            The new object
        """
        pass

    @abstractmethod
    def is_collection(self, type_: type) -> bool:
        """Return True when type_ is a collection type."""
        pass


class ObjectWrapperFactory(ABC):
    """Supplies custom property accessors for result objects."""

    @abstractmethod
    def has_wrapper_for(self, obj: Any) -> bool:
        pass

    @abstractmethod
    def get_wrapper_for(self, obj: Any) -> Any:
        pass


class ReflectorFactory(ABC):
    """Produces (and optionally caches) property metadata for types."""

    @abstractmethod
    def is_class_cache_enabled(self) -> bool:
        pass

    @abstractmethod
    def set_class_cache_enabled(self, enabled: bool) -> None:
        pass

    @abstractmethod
    def find_for_class(self, type_: type) -> Any:
        pass


class Transaction(ABC):
    """Wraps a database connection's lifecycle: open, commit, rollback, close."""

    @abstractmethod
    def get_connection(self) -> Any:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def get_timeout(self) -> Optional[int]:
        return None


class TransactionFactory(ABC):
    """Creates Transaction objects for an environment."""

    def set_properties(self, properties: Dict[str, str]) -> None:
        """Receive the <property> children of <transactionManager>."""
        pass

    @abstractmethod
    def new_transaction(self, data_source: Any, level: Optional[int] = None,
                        autocommit: bool = False) -> Transaction:
        """
        Create a transaction drawing its connection from data_source.

        Args:
            data_source: Data source of the active environment
            level: Optional transaction isolation level
            autocommit: Whether the connection should run in autocommit mode

        Returns:
            A Transaction whose connection is opened lazily
        """
        pass


class DataSourceFactory(ABC):
    """Builds the data source declared by an environment's <dataSource> element."""

    @abstractmethod
    def set_properties(self, properties: Dict[str, str]) -> None:
        pass

    @abstractmethod
    def get_data_source(self) -> Any:
        """Return the realised data source; it must expose get_connection()."""
        pass


class DatabaseIdProvider(ABC):
    """Maps an active data source to a vendor identifier used for per-vendor statements."""

    def set_properties(self, properties: Dict[str, str]) -> None:
        pass

    @abstractmethod
    def get_database_id(self, data_source: Any) -> Optional[str]:
        """
        Determine the vendor identifier for data_source.

        Args:
            data_source: Data source of the active environment

        Returns:
            Vendor identifier, or None when it cannot be determined
        """
        pass


class TypeHandler(ABC):
    """Converts values between Python types and database column types."""

    @abstractmethod
    def set_parameter(self, parameters: List[Any], index: int, value: Any,
                      jdbc_type: Any = None) -> None:
        """
        Store the database representation of value at parameters[index].

        Args:
            parameters: Positional parameter list handed to the DB-API cursor
            index: Position to fill
            value: Python value to convert
            jdbc_type: Optional target column type
        """
        pass

    @abstractmethod
    def get_result(self, row: Any, column: Any) -> Any:
        """
        Read a column from a result row and convert it to the handled Python type.

        Args:
            row: DB-API result row
            column: Column index (int) or column name (str)
        """
        pass


class LanguageDriver(ABC):
    """Turns a statement body into the SQL source used by the runtime."""

    @abstractmethod
    def create_sql_source(self, script: str, parameter_type: Optional[type] = None) -> str:
        pass


class VFS(ABC):
    """Virtual file system used to enumerate the modules of a package during scans."""

    def is_valid(self) -> bool:
        return True

    @abstractmethod
    def list(self, package_name: str) -> Iterable[str]:
        """Return the fully qualified module names contained in package_name (itself included)."""
        pass


class Log(ABC):
    """Logging adapter handed out by Configuration.get_log()."""

    @abstractmethod
    def is_debug_enabled(self) -> bool:
        pass

    @abstractmethod
    def debug(self, message: str) -> None:
        pass

    @abstractmethod
    def warn(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        pass


class SqlSession(ABC):
    """Contract of the external data-access runtime that mapper proxies dispatch to."""

    @abstractmethod
    def select_one(self, statement: str, parameter: Any = None) -> Any:
        pass

    @abstractmethod
    def select_list(self, statement: str, parameter: Any = None) -> List[Any]:
        pass

    @abstractmethod
    def insert(self, statement: str, parameter: Any = None) -> int:
        pass

    @abstractmethod
    def update(self, statement: str, parameter: Any = None) -> int:
        pass

    @abstractmethod
    def delete(self, statement: str, parameter: Any = None) -> int:
        pass

    @abstractmethod
    def get_configuration(self) -> Any:
        pass
