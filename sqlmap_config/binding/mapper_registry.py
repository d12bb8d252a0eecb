"""
Mapper registry and mapper proxies.

A mapper is an abstract class whose methods are bound, by name, to statements with
id "<module>.<Class>.<method>" declared in mapper documents. Calling a method on a
proxy dispatches to the session method matching the statement's command type.
"""

import inspect
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..exceptions import BindingError, MapperRegistrationError
from ..io.vfs import ResolverUtil
from ..models import SqlCommandType


def mapper_namespace(mapper_type: type) -> str:
    return f"{mapper_type.__module__}.{mapper_type.__qualname__}"


class MapperProxy:
    """Dispatches mapper method calls to a session."""

    def __init__(self, session, mapper_type: type, method_cache: Dict[str, Any]):
        self._session = session
        self._mapper_type = mapper_type
        self._method_cache = method_cache

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        if name not in self._method_cache:
            self._method_cache[name] = self._resolve_statement(name)
        command_type, statement_id, returns_many = self._method_cache[name]

        def call(parameter=None):
            if command_type is SqlCommandType.SELECT:
                if returns_many:
                    return self._session.select_list(statement_id, parameter)
                return self._session.select_one(statement_id, parameter)
            return getattr(self._session, command_type.value.lower())(statement_id, parameter)
        call.__name__ = name
        return call

    def _resolve_statement(self, name: str):
        if not hasattr(self._mapper_type, name):
            raise AttributeError(f"{self._mapper_type.__name__} has no method '{name}'")
        configuration = self._session.get_configuration()
        statement_id = f"{mapper_namespace(self._mapper_type)}.{name}"
        statement = configuration.mapped_statements.get(statement_id)
        if statement is None:
            raise BindingError(f"Invalid bound statement (not found): {statement_id}")
        method = getattr(self._mapper_type, name)
        annotation = inspect.signature(method).return_annotation
        returns_many = getattr(annotation, '__origin__', annotation) in (list, tuple, set)
        return statement.command_type, statement_id, returns_many

    def __repr__(self) -> str:
        return f"MapperProxy({self._mapper_type.__name__})"


class MapperProxyFactory:
    """Builds MapperProxy instances for one mapper type."""

    def __init__(self, mapper_type: type):
        self.mapper_type = mapper_type
        self._method_cache: Dict[str, Any] = {}

    def new_instance(self, session) -> MapperProxy:
        return MapperProxy(session, self.mapper_type, self._method_cache)


class MapperRegistry:
    """
    Mapping from mapper type to MapperProxyFactory.

    Registering the same mapper type twice raises MapperRegistrationError.
    """

    def __init__(self, configuration):
        self.logger = logging.getLogger(__name__)
        self.configuration = configuration
        self._known_mappers: Dict[type, MapperProxyFactory] = {}

    def get_mapper(self, mapper_type: type, session) -> MapperProxy:
        factory = self._known_mappers.get(mapper_type)
        if factory is None:
            raise BindingError(f"Type {mapper_namespace(mapper_type)} is not known to the MapperRegistry.")
        return factory.new_instance(session)

    def has_mapper(self, mapper_type: type) -> bool:
        return mapper_type in self._known_mappers

    def add_mapper(self, mapper_type: type) -> None:
        """
        Register a mapper type.

        Raises:
            MapperRegistrationError: If mapper_type is not a class or is already registered
        """
        if not inspect.isclass(mapper_type):
            raise MapperRegistrationError(f"{mapper_type!r} is not a mapper class")
        if self.has_mapper(mapper_type):
            raise MapperRegistrationError(
                f"Type {mapper_namespace(mapper_type)} is already known to the MapperRegistry.")
        self._known_mappers[mapper_type] = MapperProxyFactory(mapper_type)
        self.logger.debug(f"Registered mapper {mapper_namespace(mapper_type)}")

    def add_mappers(self, package_name: str, super_type: type = object) -> None:
        """Register every abstract class defined in a package."""
        resolver = ResolverUtil(self.configuration.vfs)
        for mapper_type in resolver.find(package_name, lambda cls: issubclass(cls, super_type)):
            if inspect.isabstract(mapper_type) and not self.has_mapper(mapper_type):
                self.add_mapper(mapper_type)

    def get_mappers(self) -> Mapping[type, MapperProxyFactory]:
        return MappingProxyType(self._known_mappers)
