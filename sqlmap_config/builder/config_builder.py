"""
Configuration assembly from an XML configuration document.

This module provides XMLConfigBuilder, which runs the section parsers of a
<configuration> document in a fixed order and returns the populated Configuration.

Section order:
    1. properties                   8. objectWrapperFactory
    2. settings (read + validate)   9. reflectorFactory
    3. vfsImpl setting             10. settings (apply)
    4. logImpl setting             11. environments
    5. typeAliases                 12. databaseIdProvider
    6. plugins                     13. typeHandlers
    7. objectFactory               14. mappers

Properties come first because every later attribute may use ${name} placeholders.
Settings are validated before anything is constructed and applied only after the
factories are installed. Environments precede the database id provider, which needs
the data source, and mappers come last because mapper documents use aliases, type
handlers and the database id established earlier.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .base_builder import BaseBuilder
from .mapper_builder import XMLMapperBuilder
from ..exceptions import (
    AlreadyParsedError, AliasRegistrationError, ConfigurationParseError, DocumentParsingError,
    EnvironmentDeclarationError,
    MapperElementError, MissingEnvironmentIdError, NoEnvironmentSpecifiedError, PropertiesSourceError,
    TypeResolutionError, UnknownSettingError,
)
from ..interfaces import DataSourceFactory, TransactionFactory
from ..io import resources
from ..models import Environment
from ..parsing.xml_parser import XNode, XPathParser
from ..session.configuration import EARLY_SETTINGS, SETTINGS, Configuration


class XMLConfigBuilder(BaseBuilder):
    """
    Single-use assembler turning a configuration document into a Configuration.

    The builder moves from "unused" to "parsed" on the first call to parse(); a second
    call raises AlreadyParsedError. Any failure inside a section is re-raised as a
    ConfigurationParseError carrying the section label and the original exception.
    """

    def __init__(self, source: Union[str, bytes, os.PathLike, Any], environment: Optional[str] = None,
                 properties: Optional[Dict[str, str]] = None,
                 base_path: Optional[Union[str, Path]] = None):
        """
        Initialize the builder.

        Args:
            source: Configuration document as XML text, bytes, a path or a file object
            environment: Optional target environment id, overriding <environments default>
            properties: Optional substitution variables; they take precedence over
                        every value declared in or loaded by the properties section
            base_path: Directory relative resources are resolved against. Defaults to
                       the directory of source when source is a path
        """
        super().__init__(Configuration())
        self.logger = logging.getLogger(__name__)
        self.configuration.variables = dict(properties or {})
        self.parser = XPathParser(source, self.configuration.variables, resource="SQL Mapper Configuration")
        self.environment = environment
        self.base_path = base_path if base_path is not None else _default_base_path(source)
        self.parsed = False
        self.current_section: Optional[str] = None

    def parse(self) -> Configuration:
        """
        Run every section parser once.

        Returns:
            The populated Configuration

        Raises:
            AlreadyParsedError: If parse() was already called on this builder
            ConfigurationParseError: If any section fails
        """
        if self.parsed:
            raise AlreadyParsedError("Each XMLConfigBuilder can only be used once.")
        self.parsed = True
        self._parse_configuration(self.parser.eval_node('/configuration'))
        self.logger.info(
            f"Configuration parsed: environment={self.configuration.environment.id if self.configuration.environment else None}, "
            f"interceptors={len(self.configuration.interceptor_chain)}, "
            f"mapped statements={len(self.configuration.mapped_statements)}")
        return self.configuration

    def _parse_configuration(self, root: Optional[XNode]) -> None:
        try:
            self._section('configuration')
            if root is None:
                raise DocumentParsingError("Configuration document has no <configuration> root element")
            self._section('properties')
            self._properties_element(root.eval_node('properties'))
            self._section('settings')
            settings = self._settings_as_properties(root.eval_node('settings'))
            self._section('vfsImpl')
            self._load_custom_vfs(settings)
            self._section('logImpl')
            self._load_custom_log_impl(settings)
            self._section('typeAliases')
            self._type_aliases_element(root.eval_node('typeAliases'))
            self._section('plugins')
            self._plugin_element(root.eval_node('plugins'))
            self._section('objectFactory')
            self._object_factory_element(root.eval_node('objectFactory'))
            self._section('objectWrapperFactory')
            self._object_wrapper_factory_element(root.eval_node('objectWrapperFactory'))
            self._section('reflectorFactory')
            self._reflector_factory_element(root.eval_node('reflectorFactory'))
            self._section('settings')
            self._settings_element(settings)
            self._section('environments')
            self._environments_element(root.eval_node('environments'))
            self._section('databaseIdProvider')
            self._database_id_provider_element(root.eval_node('databaseIdProvider'))
            self._section('typeHandlers')
            self._type_handler_element(root.eval_node('typeHandlers'))
            self._section('mappers')
            self._mapper_element(root.eval_node('mappers'))
        except Exception as e:
            self.logger.error(f"Error parsing section <{self.current_section}>: {e}")
            raise ConfigurationParseError(
                f"Error parsing SQL Mapper Configuration in section <{self.current_section}>. Cause: {e}",
                section=self.current_section, cause=e) from e

    def _section(self, label: str) -> None:
        self.current_section = label
        self.logger.debug(f"Parsing section <{label}>")

    # -- 1. properties ---------------------------------------------------------

    def _properties_element(self, context: Optional[XNode]) -> None:
        if context is None:
            return
        defaults = context.get_children_as_properties()
        resource = context.get_string_attribute('resource')
        url = context.get_string_attribute('url')
        if resource is not None and url is not None:
            raise PropertiesSourceError(
                "The properties element cannot specify both a URL and a resource based property file reference.  "
                "Please specify one or the other.")
        if resource is not None:
            defaults.update(resources.get_resource_as_properties(resource, self.base_path))
        elif url is not None:
            defaults.update(resources.get_url_as_properties(url))
        variables = self.configuration.variables
        if variables:
            defaults.update(variables)
        self.parser.set_variables(defaults)
        self.configuration.variables = defaults
        self.logger.debug(f"Loaded {len(defaults)} substitution variables")

    # -- 2-4. settings ---------------------------------------------------------

    def _settings_as_properties(self, context: Optional[XNode]) -> Dict[str, str]:
        if context is None:
            return {}
        props = context.get_children_as_properties()
        for key in props:
            if not Configuration.is_known_setting(key):
                raise UnknownSettingError(
                    f"The setting {key} is not known.  Make sure you spelled it correctly (case sensitive).", key)
        return props

    def _load_custom_vfs(self, props: Dict[str, str]) -> None:
        value = props.get('vfsImpl')
        if value is None:
            return
        for class_name in value.split(','):
            class_name = class_name.strip()
            if class_name:
                self.configuration.set_vfs_impl(self.resolve_class(class_name))

    def _load_custom_log_impl(self, props: Dict[str, str]) -> None:
        self.configuration.set_log_impl(self.resolve_class(props.get('logImpl')))

    def _settings_element(self, props: Dict[str, str]) -> None:
        for key in SETTINGS:
            if key not in EARLY_SETTINGS:
                self.configuration.apply_setting(key, props.get(key))

    # -- 5. typeAliases ---------------------------------------------------------

    def _type_aliases_element(self, parent: Optional[XNode]) -> None:
        if parent is None:
            return
        for child in parent.get_children():
            if child.name == 'package':
                self.type_alias_registry.register_aliases(child.get_string_attribute('name'))
                continue
            alias = child.get_string_attribute('alias')
            type_name = child.get_string_attribute('type')
            try:
                type_ = resources.class_for_name(type_name or '')
            except ImportError as e:
                raise AliasRegistrationError(
                    f"Error registering typeAlias for '{alias}'. Cause: {e}", alias) from e
            if alias is None:
                self.type_alias_registry.register_alias(type_)
            else:
                self.type_alias_registry.register_alias(alias, type_)

    # -- 6-9. plugins and factories ----------------------------------------------

    def _plugin_element(self, parent: Optional[XNode]) -> None:
        if parent is None:
            return
        for child in parent.get_children():
            interceptor = self.create_instance(child.get_string_attribute('interceptor'))
            if interceptor is None:
                raise TypeResolutionError("A plugin element requires an interceptor attribute")
            interceptor.set_properties(child.get_children_as_properties())
            self.configuration.add_interceptor(interceptor)

    def _object_factory_element(self, context: Optional[XNode]) -> None:
        if context is None:
            return
        factory = self._create_required_instance(context, 'objectFactory')
        factory.set_properties(context.get_children_as_properties())
        self.configuration.object_factory = factory

    def _object_wrapper_factory_element(self, context: Optional[XNode]) -> None:
        if context is not None:
            self.configuration.object_wrapper_factory = self._create_required_instance(context, 'objectWrapperFactory')

    def _reflector_factory_element(self, context: Optional[XNode]) -> None:
        if context is not None:
            self.configuration.reflector_factory = self._create_required_instance(context, 'reflectorFactory')

    def _create_required_instance(self, context: XNode, element: str) -> Any:
        instance = self.create_instance(context.get_string_attribute('type'))
        if instance is None:
            raise TypeResolutionError(f"The <{element}> element requires a type attribute")
        return instance

    # -- 11. environments ---------------------------------------------------------

    def _environments_element(self, context: Optional[XNode]) -> None:
        if context is None:
            # No declarations: a requested id stays unresolved
            if self.environment is not None:
                self.configuration.requested_environment_id = self.environment
                self.logger.warning(f"Environment '{self.environment}' was requested but the document declares no environments")
            return
        if self.environment is None:
            self.environment = context.get_string_attribute('default')
        self.configuration.requested_environment_id = self.environment
        for child in context.get_children():
            environment_id = child.get_string_attribute('id')
            if self._is_specified_environment(environment_id):
                tx_factory = self._transaction_manager_element(child.eval_node('transactionManager'))
                ds_factory = self._data_source_element(child.eval_node('dataSource'))
                data_source = ds_factory.get_data_source()
                self.configuration.environment = Environment(environment_id, tx_factory, data_source)
                self.logger.info(f"Using environment '{environment_id}'")
        if self.configuration.environment is None:
            self.logger.warning(f"Environment '{self.environment}' was requested but is not declared")

    def _is_specified_environment(self, environment_id: Optional[str]) -> bool:
        if self.environment is None:
            raise NoEnvironmentSpecifiedError("No environment specified.")
        if environment_id is None:
            raise MissingEnvironmentIdError("Environment requires an id attribute.")
        return self.environment == environment_id

    def _transaction_manager_element(self, context: Optional[XNode]) -> TransactionFactory:
        if context is None:
            raise EnvironmentDeclarationError("Environment declaration requires a TransactionFactory.")
        factory = self._create_required_instance(context, 'transactionManager')
        factory.set_properties(context.get_children_as_properties())
        return factory

    def _data_source_element(self, context: Optional[XNode]) -> DataSourceFactory:
        if context is None:
            raise EnvironmentDeclarationError("Environment declaration requires a DataSourceFactory.")
        factory = self._create_required_instance(context, 'dataSource')
        factory.set_properties(context.get_children_as_properties())
        return factory

    # -- 12. databaseIdProvider -----------------------------------------------------

    def _database_id_provider_element(self, context: Optional[XNode]) -> None:
        if context is None:
            return
        provider_type = context.get_string_attribute('type')
        # Legacy alias
        if provider_type == 'VENDOR':
            provider_type = 'DB_VENDOR'
        provider = self.create_instance(provider_type)
        if provider is None:
            raise TypeResolutionError("The <databaseIdProvider> element requires a type attribute")
        provider.set_properties(context.get_children_as_properties())
        environment = self.configuration.environment
        if environment is not None:
            self.configuration.database_id = provider.get_database_id(environment.data_source)
            self.logger.info(f"Database id resolved to '{self.configuration.database_id}'")

    # -- 13. typeHandlers -----------------------------------------------------------

    def _type_handler_element(self, parent: Optional[XNode]) -> None:
        if parent is None:
            return
        for child in parent.get_children():
            if child.name == 'package':
                self.type_handler_registry.register_package(child.get_string_attribute('name'))
                continue
            value_type = self.resolve_class(child.get_string_attribute('javaType'))
            jdbc_type = self.resolve_jdbc_type(child.get_string_attribute('jdbcType'))
            handler_type = self.resolve_class(child.get_string_attribute('handler'))
            if handler_type is None:
                raise TypeResolutionError("A typeHandler element requires a handler attribute")
            if value_type is not None:
                if jdbc_type is None:
                    self.type_handler_registry.register(value_type, handler_type)
                else:
                    self.type_handler_registry.register(value_type, jdbc_type, handler_type)
            else:
                self.type_handler_registry.register(handler_type)

    # -- 14. mappers ------------------------------------------------------------------

    def _mapper_element(self, parent: Optional[XNode]) -> None:
        if parent is None:
            return
        for child in parent.get_children():
            if child.name == 'package':
                self.configuration.add_mappers(child.get_string_attribute('name'))
                continue
            resource = child.get_string_attribute('resource')
            url = child.get_string_attribute('url')
            mapper_class = child.get_string_attribute('class')
            if resource is not None and url is None and mapper_class is None:
                self.current_section = f"mappers: {resource}"
                content = resources.get_resource_as_bytes(resource, self.base_path)
                XMLMapperBuilder(content, self.configuration, resource, self.configuration.sql_fragments).parse()
            elif resource is None and url is not None and mapper_class is None:
                self.current_section = f"mappers: {url}"
                content = resources.get_url_as_bytes(url)
                XMLMapperBuilder(content, self.configuration, url, self.configuration.sql_fragments).parse()
            elif resource is None and url is None and mapper_class is not None:
                self.configuration.add_mapper(self.resolve_class(mapper_class))
            else:
                raise MapperElementError(
                    "A mapper element may only specify a url, resource or class, but not more than one.")


def _default_base_path(source: Any) -> Optional[Path]:
    if isinstance(source, os.PathLike) or (isinstance(source, str) and not source.lstrip().startswith('<')):
        return Path(source).resolve().parent
    return None
