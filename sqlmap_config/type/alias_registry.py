"""
Type alias registry.

Maps case-insensitive short names to concrete types so configuration documents can
write "UNPOOLED" or "date" instead of a full dotted path.
"""

import datetime
import decimal
import inspect
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .annotations import explicit_alias, has_no_alias
from ..exceptions import AliasRegistrationError, UnknownAliasError
from ..io import resources
from ..io.vfs import ResolverUtil


class ResultSet:
    """Marker type for statements that return a raw cursor."""


BUILTIN_ALIASES = {
    'str': str,
    'string': str,
    'int': int,
    'integer': int,
    'long': int,
    'short': int,
    'float': float,
    'double': float,
    'bool': bool,
    'boolean': bool,
    'bytes': bytes,
    'byte[]': bytes,
    'bytearray': bytearray,
    'decimal': decimal.Decimal,
    'bigdecimal': decimal.Decimal,
    'date': datetime.date,
    'datetime': datetime.datetime,
    'time': datetime.time,
    'dict': dict,
    'map': dict,
    'hashmap': dict,
    'list': list,
    'arraylist': list,
    'collection': list,
    'set': set,
    'tuple': tuple,
    'object': object,
    'resultset': ResultSet,
}


class TypeAliasRegistry:
    """
    Bidirectional alias registry pre-seeded with Python scalar and collection types.

    Aliases are case-insensitive: "Foo" and "foo" name the same entry, so registering
    them for two different types is a conflict.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._aliases: Dict[str, type] = {}
        self.vfs = None
        for name, type_ in BUILTIN_ALIASES.items():
            self.register_alias(name, type_)

    def resolve_alias(self, name: Optional[str]) -> Optional[type]:
        """
        Resolve an alias or dotted type path.

        Args:
            name: Alias (any case) or dotted path; None resolves to None

        Returns:
            The resolved type, or None for a None input

        Raises:
            UnknownAliasError: If name is neither a registered alias nor an importable type
        """
        if name is None:
            return None
        key = name.lower()
        if key in self._aliases:
            return self._aliases[key]
        try:
            return resources.class_for_name(name)
        except ImportError as e:
            raise UnknownAliasError(f"Could not resolve type alias '{name}'. Cause: {e}", name) from e

    def register_aliases(self, package_name: str, super_type: type = object) -> None:
        """
        Register every concrete class defined in a package.

        Abstract classes, private classes (leading underscore) and classes marked
        with @no_alias are skipped.
        """
        resolver = ResolverUtil(self.vfs)
        types = resolver.find(package_name, lambda cls: issubclass(cls, super_type))
        registered = 0
        for type_ in types:
            if inspect.isabstract(type_) or type_.__name__.startswith('_') or has_no_alias(type_):
                continue
            self.register_alias(type_)
            registered += 1
        self.logger.debug(f"Registered {registered} type aliases from package {package_name}")

    def register_alias(self, alias, type_: Optional[type] = None) -> None:
        """
        Register an alias.

        Called with a single type, the alias is derived from the type's @alias
        decorator or, failing that, its class name. Called with (alias, type), the
        alias is used as given.

        Raises:
            AliasRegistrationError: If the alias is already mapped to a different type
        """
        if type_ is None:
            type_ = alias
            alias = explicit_alias(type_) or type_.__name__
        if alias is None:
            raise AliasRegistrationError("The parameter alias cannot be null")
        key = alias.lower()
        existing = self._aliases.get(key)
        if existing is not None and existing is not type_:
            raise AliasRegistrationError(
                f"The alias '{alias}' is already mapped to the value '{_qualified_name(existing)}'.",
                alias)
        self._aliases[key] = type_

    def register_alias_by_name(self, alias: str, value: str) -> None:
        """Register alias for the type at dotted path value."""
        try:
            type_ = resources.class_for_name(value)
        except ImportError as e:
            raise AliasRegistrationError(
                f"Error registering type alias {alias} for {value}. Cause: {e}", alias) from e
        self.register_alias(alias, type_)

    def get_type_aliases(self) -> Mapping[str, type]:
        return MappingProxyType(self._aliases)

    def __contains__(self, alias: str) -> bool:
        return alias is not None and alias.lower() in self._aliases


def _qualified_name(type_: type) -> str:
    return f"{type_.__module__}.{type_.__qualname__}"
