"""Default object creation and wrapping strategies."""

import collections.abc
from typing import Any, Dict, List, Optional

from ..interfaces import ObjectFactory, ObjectWrapperFactory
from ..type.type_resolver import instantiate

# Abstract collection types are created as their concrete counterparts
_COLLECTION_IMPLEMENTATIONS = {
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
}


class DefaultObjectFactory(ObjectFactory):

    def __init__(self):
        self.properties: Dict[str, str] = {}

    def set_properties(self, properties: Dict[str, str]) -> None:
        self.properties = dict(properties)

    def create(self, type_: type, constructor_args: Optional[List[Any]] = None) -> Any:
        type_ = _COLLECTION_IMPLEMENTATIONS.get(type_, type_)
        if constructor_args:
            return type_(*constructor_args)
        return instantiate(type_)

    def is_collection(self, type_: type) -> bool:
        return (isinstance(type_, type) and issubclass(type_, collections.abc.Collection)
                and not issubclass(type_, (str, bytes, bytearray, collections.abc.Mapping)))


class DefaultObjectWrapperFactory(ObjectWrapperFactory):
    """Provides no custom wrappers."""

    def has_wrapper_for(self, obj: Any) -> bool:
        return False

    def get_wrapper_for(self, obj: Any) -> Any:
        raise NotImplementedError("The DefaultObjectWrapperFactory should never be called to provide an ObjectWrapper.")
