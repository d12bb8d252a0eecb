"""
The Configuration object produced by configuration assembly.

This module provides the Configuration class that owns every registry, the active
environment and the behaviour settings, together with the SETTINGS descriptor table
used to validate and apply the <settings> section.
"""

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Set

from ..binding.mapper_registry import MapperRegistry
from ..datasource.unpooled import UnpooledDataSourceFactory
from ..exceptions import MapperElementError, SettingValueError
from ..interfaces import Interceptor, Log
from ..io.vfs import DefaultVFS
from ..log_impl import NoLoggingImpl, StdlibLoggingImpl, StdOutImpl
from ..mapping.database_id_provider import VendorDatabaseIdProvider
from ..models import (
    AutoMappingBehavior, AutoMappingUnknownColumnBehavior, Environment, ExecutorType,
    JdbcType, LocalCacheScope, MappedStatement,
)
from ..plugin.interceptor_chain import InterceptorChain
from ..reflection.object_factory import DefaultObjectFactory, DefaultObjectWrapperFactory
from ..reflection.reflector import DefaultReflectorFactory
from ..scripting.drivers import LanguageDriverRegistry, RawLanguageDriver, XMLLanguageDriver
from ..transaction.transactions import ManagedTransactionFactory, OdbcTransactionFactory
from ..type.alias_registry import TypeAliasRegistry
from ..type.type_handler_registry import TypeHandlerRegistry
from ..type.type_resolver import instantiate, resolve_class


class Setting(NamedTuple):
    """Descriptor of one <setting>: target attribute, string converter and default."""
    attribute: str
    convert: Callable[[str, 'Configuration'], Any]
    default: Any


def _boolean(value: str, configuration) -> bool:
    return value.strip().lower() == 'true'


def _integer(value: str, configuration) -> Optional[int]:
    return int(value.strip())


def _string(value: str, configuration) -> str:
    return value


def _string_set(value: str, configuration) -> Set[str]:
    return {item.strip() for item in value.split(',') if item.strip()}


def _enum(enum_type):
    def convert(value: str, configuration):
        return enum_type[value.strip()]
    return convert


def _type(value: str, configuration) -> Optional[type]:
    return resolve_class(value, configuration.type_alias_registry)


SETTINGS: Dict[str, Setting] = {
    'autoMappingBehavior': Setting('auto_mapping_behavior', _enum(AutoMappingBehavior), AutoMappingBehavior.PARTIAL),
    'autoMappingUnknownColumnBehavior': Setting('auto_mapping_unknown_column_behavior',
                                                _enum(AutoMappingUnknownColumnBehavior),
                                                AutoMappingUnknownColumnBehavior.NONE),
    'cacheEnabled': Setting('cache_enabled', _boolean, True),
    'lazyLoadingEnabled': Setting('lazy_loading_enabled', _boolean, False),
    'aggressiveLazyLoading': Setting('aggressive_lazy_loading', _boolean, False),
    'multipleResultSetsEnabled': Setting('multiple_result_sets_enabled', _boolean, True),
    'useColumnLabel': Setting('use_column_label', _boolean, True),
    'useGeneratedKeys': Setting('use_generated_keys', _boolean, False),
    'defaultExecutorType': Setting('default_executor_type', _enum(ExecutorType), ExecutorType.SIMPLE),
    'defaultStatementTimeout': Setting('default_statement_timeout', _integer, None),
    'defaultFetchSize': Setting('default_fetch_size', _integer, None),
    'mapUnderscoreToCamelCase': Setting('map_underscore_to_camel_case', _boolean, False),
    'safeRowBoundsEnabled': Setting('safe_row_bounds_enabled', _boolean, False),
    'localCacheScope': Setting('local_cache_scope', _enum(LocalCacheScope), LocalCacheScope.SESSION),
    'jdbcTypeForNull': Setting('jdbc_type_for_null', _enum(JdbcType), JdbcType.OTHER),
    'lazyLoadTriggerMethods': Setting('lazy_load_trigger_methods', _string_set,
                                      frozenset({'equals', 'clone', 'hashCode', 'toString'})),
    'safeResultHandlerEnabled': Setting('safe_result_handler_enabled', _boolean, True),
    'defaultScriptingLanguage': Setting('default_scripting_language', _type, None),
    'defaultEnumTypeHandler': Setting('default_enum_type_handler', _type, None),
    'callSettersOnNulls': Setting('call_setters_on_nulls', _boolean, False),
    'useActualParamName': Setting('use_actual_param_name', _boolean, True),
    'returnInstanceForEmptyRow': Setting('return_instance_for_empty_row', _boolean, False),
    'logPrefix': Setting('log_prefix', _string, None),
    # Installed before type aliases are parsed, see XMLConfigBuilder
    'vfsImpl': Setting('vfs_impl', _string, None),
    'logImpl': Setting('log_impl', _type, None),
}

EARLY_SETTINGS = ('vfsImpl', 'logImpl')


class Configuration:
    """
    Fully assembled configuration for the data-access runtime.

    Mutated only by the section parsers during assembly; treat as read-only once
    returned by XMLConfigBuilder.parse().
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.logger = logging.getLogger(__name__)

        self.environment: Optional[Environment] = environment
        self.requested_environment_id: Optional[str] = None
        self.database_id: Optional[str] = None
        self.variables: Dict[str, str] = {}

        # Behaviour settings, see SETTINGS for the document keys
        for setting in SETTINGS.values():
            if setting.attribute not in ('default_scripting_language', 'default_enum_type_handler'):
                setattr(self, setting.attribute, setting.default)

        self.object_factory = DefaultObjectFactory()
        self.object_wrapper_factory = DefaultObjectWrapperFactory()
        self.reflector_factory = DefaultReflectorFactory()
        self._vfs = None

        self.type_alias_registry = TypeAliasRegistry()
        self.type_handler_registry = TypeHandlerRegistry()
        self.interceptor_chain = InterceptorChain()
        self.mapper_registry = MapperRegistry(self)
        self.language_registry = LanguageDriverRegistry()

        self.sql_fragments: Dict[str, Any] = {}
        self.mapped_statements: Dict[str, MappedStatement] = {}
        self.loaded_resources: Set[str] = set()

        self.type_alias_registry.register_alias("JDBC", OdbcTransactionFactory)
        self.type_alias_registry.register_alias("ODBC", OdbcTransactionFactory)
        self.type_alias_registry.register_alias("MANAGED", ManagedTransactionFactory)
        self.type_alias_registry.register_alias("UNPOOLED", UnpooledDataSourceFactory)
        self.type_alias_registry.register_alias("DB_VENDOR", VendorDatabaseIdProvider)
        self.type_alias_registry.register_alias("XML", XMLLanguageDriver)
        self.type_alias_registry.register_alias("RAW", RawLanguageDriver)
        self.type_alias_registry.register_alias("STDLIB_LOGGING", StdlibLoggingImpl)
        self.type_alias_registry.register_alias("STDOUT_LOGGING", StdOutImpl)
        self.type_alias_registry.register_alias("NO_LOGGING", NoLoggingImpl)
        self.type_alias_registry.register_alias("DEFAULT_VFS", DefaultVFS)

        self.language_registry.set_default_driver_class(XMLLanguageDriver)
        self.language_registry.register(RawLanguageDriver)

    # -- settings -------------------------------------------------------------

    @staticmethod
    def is_known_setting(key: str) -> bool:
        """Return True when key is a <setting> name this Configuration exposes (case sensitive)."""
        return key in SETTINGS

    def apply_setting(self, key: str, value: Optional[str]) -> None:
        """
        Convert and assign one setting; a None value assigns the documented default.

        Raises:
            SettingValueError: If value cannot be converted to the setting's type
        """
        setting = SETTINGS[key]
        if value is None:
            converted = setting.default
        else:
            try:
                converted = setting.convert(value, self)
            except (KeyError, ValueError) as e:
                raise SettingValueError(f"Invalid value '{value}' for setting {key}", key, value) from e
        setattr(self, setting.attribute, converted)

    def get_settings(self) -> Dict[str, Any]:
        """Snapshot of every setting keyed by its document name."""
        return {key: getattr(self, setting.attribute) for key, setting in SETTINGS.items()}

    @property
    def default_scripting_language(self) -> Optional[type]:
        return self.language_registry.default_driver_class

    @default_scripting_language.setter
    def default_scripting_language(self, driver_class: Optional[type]) -> None:
        if driver_class is None:
            driver_class = XMLLanguageDriver
        self.language_registry.set_default_driver_class(driver_class)

    @property
    def default_enum_type_handler(self) -> type:
        return self.type_handler_registry.default_enum_type_handler

    @default_enum_type_handler.setter
    def default_enum_type_handler(self, handler_type: Optional[type]) -> None:
        if handler_type is not None:
            self.type_handler_registry.default_enum_type_handler = handler_type

    # -- strategies -------------------------------------------------------------

    def set_vfs_impl(self, vfs_class: Optional[type]) -> None:
        """Install a VFS implementation; used by every later package scan."""
        if vfs_class is None:
            return
        self.vfs_impl = vfs_class
        self._vfs = instantiate(vfs_class)
        self.type_alias_registry.vfs = self._vfs
        self.type_handler_registry.vfs = self._vfs

    @property
    def vfs(self):
        if self._vfs is None:
            self._vfs = DefaultVFS()
        return self._vfs

    def set_log_impl(self, log_class: Optional[type]) -> None:
        if log_class is not None:
            self.log_impl = log_class
            self.get_log(__name__).debug(f"Logging initialized using '{log_class.__name__}' adapter.")

    def get_log(self, name: str) -> Log:
        """Return a Log adapter of the configured class for name (prefixed with logPrefix)."""
        log_class = self.log_impl or StdlibLoggingImpl
        return log_class(f"{self.log_prefix}{name}" if self.log_prefix else name)

    def add_interceptor(self, interceptor: Interceptor) -> None:
        self.interceptor_chain.add_interceptor(interceptor)

    def get_interceptors(self) -> List[Interceptor]:
        return self.interceptor_chain.get_interceptors()

    def plugin(self, target: Any) -> Any:
        """Apply the interceptor chain to a runtime component (executor, handler, ...)."""
        return self.interceptor_chain.plugin_all(target)

    # -- environment -------------------------------------------------------------

    @property
    def environment_resolved(self) -> bool:
        """False when an environment was requested but no declared environment matched it."""
        return self.requested_environment_id is None or self.environment is not None

    # -- mappers and statements ---------------------------------------------------

    def add_mapper(self, mapper_type: type) -> None:
        self.mapper_registry.add_mapper(mapper_type)

    def add_mappers(self, package_name: str, super_type: type = object) -> None:
        self.mapper_registry.add_mappers(package_name, super_type)

    def has_mapper(self, mapper_type: type) -> bool:
        return self.mapper_registry.has_mapper(mapper_type)

    def get_mapper(self, mapper_type: type, session):
        return self.mapper_registry.get_mapper(mapper_type, session)

    def add_mapped_statement(self, statement: MappedStatement) -> None:
        """
        Register a statement.

        A vendor-specific statement replaces a generic one with the same id and a
        generic one never replaces a vendor-specific one.

        Raises:
            MapperElementError: If a statement with the same id and database id exists
        """
        existing = self.mapped_statements.get(statement.id)
        if existing is not None:
            if existing.database_id == statement.database_id:
                raise MapperElementError(
                    f"Mapped Statements collection already contains value for {statement.id}",
                    statement.resource)
            if existing.database_id is not None:
                return
        self.mapped_statements[statement.id] = statement

    def is_resource_loaded(self, resource: str) -> bool:
        return resource in self.loaded_resources

    def add_loaded_resource(self, resource: str) -> None:
        self.loaded_resources.add(resource)

    # -- reporting --------------------------------------------------------------

    def get_configuration_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the assembled configuration.

        Returns:
            Dictionary containing configuration summary
        """
        return {
            'environment': {
                'id': self.environment.id if self.environment else None,
                'requested_id': self.requested_environment_id,
                'transaction_factory': type(self.environment.transaction_factory).__name__ if self.environment else None,
                'data_source': repr(self.environment.data_source) if self.environment else None,
                'database_id': self.database_id,
            },
            'settings': {key: _describe(value) for key, value in self.get_settings().items()},
            'interceptors': [type(interceptor).__name__ for interceptor in self.get_interceptors()],
            'mappers': sorted(f"{t.__module__}.{t.__qualname__}" for t in self.mapper_registry.get_mappers()),
            'mapped_statements': sorted(self.mapped_statements),
            'loaded_resources': sorted(self.loaded_resources),
            'type_aliases': len(self.type_alias_registry.get_type_aliases()),
        }


def _describe(value: Any) -> Any:
    if isinstance(value, type):
        return value.__name__
    if hasattr(value, 'name') and hasattr(value, 'value'):
        return value.name
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value
