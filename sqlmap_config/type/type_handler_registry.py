"""
Type handler registry.

Handlers are keyed by (value type, jdbc type). A jdbc type of None is the generic
entry for a value type; lookups prefer the exact (value type, jdbc type) entry, then
the generic entry, then the sole handler registered for the value type.
"""

import datetime
import decimal
import inspect
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from .type_handlers import (
    BooleanTypeHandler, BytesTypeHandler, DateTimeTypeHandler, DateTypeHandler,
    DecimalTypeHandler, EnumTypeHandler, FloatTypeHandler, IntegerTypeHandler,
    ObjectTypeHandler, SqlTimestampTypeHandler, StringTypeHandler, TimeTypeHandler,
    is_enum_type,
)
from ..exceptions import TypeHandlerRegistrationError
from ..interfaces import TypeHandler
from ..io.vfs import ResolverUtil
from ..models import JdbcType


class TypeHandlerRegistry:
    """Keyed collection of TypeHandler instances."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._type_handler_map: Dict[Optional[type], Dict[Optional[JdbcType], TypeHandler]] = {}
        self._all_type_handlers: Dict[type, TypeHandler] = {}
        self.default_enum_type_handler: type = EnumTypeHandler
        self.vfs = None

        self.register(bool, BooleanTypeHandler())
        self.register(int, IntegerTypeHandler())
        self.register(float, FloatTypeHandler())
        self.register(str, StringTypeHandler())
        self.register(str, JdbcType.CHAR, StringTypeHandler())
        self.register(str, JdbcType.VARCHAR, StringTypeHandler())
        self.register(str, JdbcType.NVARCHAR, StringTypeHandler())
        self.register(decimal.Decimal, DecimalTypeHandler())
        self.register(bytes, BytesTypeHandler())
        self.register(datetime.datetime, DateTimeTypeHandler())
        self.register(datetime.date, DateTypeHandler())
        self.register(datetime.date, JdbcType.TIMESTAMP, SqlTimestampTypeHandler())
        self.register(datetime.time, TimeTypeHandler())
        self.register(object, ObjectTypeHandler())

    def has_type_handler(self, value_type: Optional[type], jdbc_type: Optional[JdbcType] = None) -> bool:
        return value_type is not None and self.get_type_handler(value_type, jdbc_type) is not None

    def get_mapping_type_handler(self, handler_type: type) -> Optional[TypeHandler]:
        """Return the registered instance of handler_type, if any."""
        return self._all_type_handlers.get(handler_type)

    def get_type_handler(self, value_type: Optional[type], jdbc_type: Optional[JdbcType] = None) -> Optional[TypeHandler]:
        """
        Look up the handler for a value type and optional jdbc type.

        Args:
            value_type: Python value type
            jdbc_type: Optional column type discriminator

        Returns:
            The most specific matching handler, or None
        """
        jdbc_handler_map = self._get_jdbc_handler_map(value_type)
        if not jdbc_handler_map:
            return None
        handler = jdbc_handler_map.get(jdbc_type)
        if handler is None:
            handler = jdbc_handler_map.get(None)
        if handler is None:
            handler = _pick_sole_handler(jdbc_handler_map.values())
        return handler

    def get_type_handlers(self) -> Iterable[TypeHandler]:
        return list(self._all_type_handlers.values())

    def get_type_handler_map(self) -> Mapping[Optional[type], Mapping[Optional[JdbcType], TypeHandler]]:
        return MappingProxyType(self._type_handler_map)

    def register(self, *args) -> None:
        """
        Register a type handler.

        Accepted forms:
            register(handler_type_or_instance)
                value types come from the handler's mapped_types / handled_type
            register(value_type, handler_type_or_instance)
                jdbc types come from the handler's mapped_jdbc_types
            register(value_type, jdbc_type, handler_type_or_instance)

        Raises:
            TypeHandlerRegistrationError: For any other argument shape
        """
        if len(args) == 1:
            self._register_handler_only(args[0])
        elif len(args) == 2:
            self._register_with_value_type(args[0], args[1])
        elif len(args) == 3:
            value_type, jdbc_type, handler = args
            self._register(value_type, jdbc_type, self._as_instance(value_type, handler))
        else:
            raise TypeHandlerRegistrationError(f"Unsupported type handler registration arguments: {args!r}")

    def register_package(self, package_name: str) -> None:
        """Register every concrete TypeHandler class defined in a package."""
        resolver = ResolverUtil(self.vfs)
        handler_types = resolver.find_implementations(package_name, TypeHandler)
        for handler_type in handler_types:
            if inspect.isabstract(handler_type) or handler_type.__name__.startswith('_'):
                continue
            self.register(handler_type)
        self.logger.debug(f"Scanned package {package_name} for type handlers")

    def _register_handler_only(self, handler) -> None:
        handler_type = handler if isinstance(handler, type) else type(handler)
        value_types = getattr(handler_type, 'mapped_types', None)
        if value_types:
            for value_type in value_types:
                self._register_with_value_type(value_type, handler)
            return
        value_type = getattr(handler_type, 'handled_type', None)
        self._register_with_value_type(value_type, handler)

    def _register_with_value_type(self, value_type: Optional[type], handler) -> None:
        instance = self._as_instance(value_type, handler)
        jdbc_types = getattr(type(instance), 'mapped_jdbc_types', None)
        if jdbc_types:
            for jdbc_type in jdbc_types:
                self._register(value_type, jdbc_type, instance)
            if getattr(type(instance), 'include_null_jdbc_type', False):
                self._register(value_type, None, instance)
        else:
            self._register(value_type, None, instance)

    def _register(self, value_type: Optional[type], jdbc_type: Optional[JdbcType], handler: TypeHandler) -> None:
        if jdbc_type is not None and not isinstance(jdbc_type, JdbcType):
            raise TypeHandlerRegistrationError(f"Invalid jdbc type {jdbc_type!r}")
        if not isinstance(handler, TypeHandler):
            raise TypeHandlerRegistrationError(f"{handler!r} does not implement TypeHandler")
        self._type_handler_map.setdefault(value_type, {})[jdbc_type] = handler
        self._all_type_handlers[type(handler)] = handler

    def _as_instance(self, value_type: Optional[type], handler) -> TypeHandler:
        """Instantiate a handler class, passing value_type when the constructor takes one."""
        if not isinstance(handler, type):
            return handler
        try:
            if value_type is not None and _accepts_type_argument(handler):
                return handler(value_type)
            return handler()
        except Exception as e:
            raise TypeHandlerRegistrationError(
                f"Unable to find a usable constructor for {handler.__name__}. Cause: {e}") from e

    def _get_jdbc_handler_map(self, value_type: Optional[type]) -> Optional[Dict[Optional[JdbcType], TypeHandler]]:
        if value_type is None:
            return self._type_handler_map.get(None)
        jdbc_handler_map = self._type_handler_map.get(value_type)
        if jdbc_handler_map is not None:
            return jdbc_handler_map
        if is_enum_type(value_type):
            # Built per lookup; the registry is not modified once assembled
            return {None: self._as_instance(value_type, self.default_enum_type_handler)}
        for base in getattr(value_type, '__mro__', ())[1:]:
            if base is object:
                break
            if base in self._type_handler_map:
                return self._type_handler_map[base]
        return None


def _pick_sole_handler(handlers: Iterable[TypeHandler]) -> Optional[TypeHandler]:
    sole = None
    for handler in handlers:
        if sole is None:
            sole = handler
        elif type(handler) is not type(sole):
            return None
    return sole


def _accepts_type_argument(handler_type: type) -> bool:
    try:
        signature = inspect.signature(handler_type)
    except (TypeError, ValueError):
        return False
    positional = [p for p in signature.parameters.values()
                  if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    return len(positional) >= 1
