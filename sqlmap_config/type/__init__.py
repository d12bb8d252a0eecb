"""Type resolution, aliases and type handlers."""

from .alias_registry import TypeAliasRegistry
from .annotations import alias, mapped_jdbc_types, mapped_types, no_alias
from .type_handler_registry import TypeHandlerRegistry
from .type_resolver import create_instance, instantiate, resolve_class

__all__ = [
    'TypeAliasRegistry', 'TypeHandlerRegistry',
    'alias', 'no_alias', 'mapped_types', 'mapped_jdbc_types',
    'resolve_class', 'instantiate', 'create_instance',
]
