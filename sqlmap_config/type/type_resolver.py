"""
Dynamic type resolution and instantiation.

Every strategy named in a configuration document goes through these two steps:
resolve the string (alias or dotted path) to a type, then build the type with its
zero-argument constructor.
"""

from typing import Any, Optional

from .alias_registry import TypeAliasRegistry
from ..exceptions import InstantiationError, TypeResolutionError, UnknownAliasError


def resolve_class(name: Optional[str], alias_registry: TypeAliasRegistry) -> Optional[type]:
    """
    Resolve an alias or dotted path to a type.

    Args:
        name: Alias or dotted path. None or empty means "no override"
        alias_registry: Registry consulted before falling back to an import

    Returns:
        The resolved type, or None for an empty input

    Raises:
        TypeResolutionError: If name is non-empty but cannot be resolved
    """
    if not name:
        return None
    try:
        return alias_registry.resolve_alias(name)
    except UnknownAliasError:
        raise
    except Exception as e:
        raise TypeResolutionError(f"Error resolving class '{name}'. Cause: {e}", name) from e


def instantiate(type_: type) -> Any:
    """
    Build type_ with its zero-argument constructor.

    Raises:
        InstantiationError: If type_ is not a class, requires arguments, or its constructor fails
    """
    if not isinstance(type_, type):
        raise InstantiationError(f"Cannot instantiate {type_!r}: not a type", repr(type_))
    name = f"{type_.__module__}.{type_.__qualname__}"
    try:
        return type_()
    except TypeError as e:
        raise InstantiationError(
            f"Error instantiating {name}: a zero-argument constructor is required. Cause: {e}",
            name) from e
    except Exception as e:
        raise InstantiationError(f"Error instantiating {name}. Cause: {e}", name) from e


def create_instance(name: Optional[str], alias_registry: TypeAliasRegistry) -> Optional[Any]:
    """Resolve name and instantiate the result; None for an empty name."""
    type_ = resolve_class(name, alias_registry)
    if type_ is None:
        return None
    return instantiate(type_)
