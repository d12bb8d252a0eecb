"""Property metadata for result and parameter types."""

import dataclasses
import inspect
from typing import Dict, List

from ..interfaces import ReflectorFactory


class Reflector:
    """
    Readable and writable property names of a type.

    Dataclass fields, annotated class attributes and properties with setters are
    writable; properties without setters are read-only.
    """

    def __init__(self, type_: type):
        self.type = type_
        self.writable: List[str] = []
        self.readable: List[str] = []
        self._collect()

    def has_setter(self, name: str) -> bool:
        return name in self.writable

    def has_getter(self, name: str) -> bool:
        return name in self.readable

    def _collect(self) -> None:
        names = []
        if dataclasses.is_dataclass(self.type):
            names.extend(field.name for field in dataclasses.fields(self.type))
        for klass in reversed(self.type.__mro__):
            names.extend(getattr(klass, '__annotations__', {}).keys())
        for name in dict.fromkeys(names):
            if not name.startswith('_'):
                self.writable.append(name)
                self.readable.append(name)
        for name, member in inspect.getmembers(self.type, lambda m: isinstance(m, property)):
            if name.startswith('_'):
                continue
            if name not in self.readable:
                self.readable.append(name)
            if member.fset is not None and name not in self.writable:
                self.writable.append(name)


class DefaultReflectorFactory(ReflectorFactory):
    """Builds Reflectors, caching one per type while the class cache is enabled."""

    def __init__(self):
        self.class_cache_enabled = True
        self._reflectors: Dict[type, Reflector] = {}

    def is_class_cache_enabled(self) -> bool:
        return self.class_cache_enabled

    def set_class_cache_enabled(self, enabled: bool) -> None:
        self.class_cache_enabled = enabled

    def find_for_class(self, type_: type) -> Reflector:
        if not self.class_cache_enabled:
            return Reflector(type_)
        if type_ not in self._reflectors:
            self._reflectors[type_] = Reflector(type_)
        return self._reflectors[type_]
