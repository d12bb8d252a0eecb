"""Shared resolution helpers for configuration and mapper builders."""

from typing import Any, Optional

from ..exceptions import TypeResolutionError
from ..models import JdbcType
from ..session.configuration import Configuration
from ..type import type_resolver


class BaseBuilder:
    """Resolves aliases, types and jdbc types against a Configuration's registries."""

    def __init__(self, configuration: Configuration):
        self.configuration = configuration
        self.type_alias_registry = configuration.type_alias_registry
        self.type_handler_registry = configuration.type_handler_registry

    def resolve_class(self, name: Optional[str]) -> Optional[type]:
        return type_resolver.resolve_class(name, self.type_alias_registry)

    def create_instance(self, name: Optional[str]) -> Optional[Any]:
        return type_resolver.create_instance(name, self.type_alias_registry)

    def resolve_jdbc_type(self, name: Optional[str]) -> Optional[JdbcType]:
        if not name:
            return None
        try:
            return JdbcType[name.strip().upper()]
        except KeyError as e:
            raise TypeResolutionError(f"Error resolving JdbcType. Cause: unknown jdbc type '{name}'", name) from e
