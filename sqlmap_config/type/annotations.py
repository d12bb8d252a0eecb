"""Class decorators read by the alias and type handler registries."""

_NO_ALIAS = object()


def alias(name: str):
    """Give a class an explicit alias used when it is registered without one."""
    def decorate(cls):
        cls.__type_alias__ = name
        return cls
    return decorate


def no_alias(cls):
    """Exclude a class from package alias scans."""
    cls.__type_alias__ = _NO_ALIAS
    return cls


def has_no_alias(cls) -> bool:
    return cls.__dict__.get('__type_alias__') is _NO_ALIAS


def explicit_alias(cls):
    """Return the alias set with @alias on cls itself (not inherited), or None."""
    value = cls.__dict__.get('__type_alias__')
    return None if value is _NO_ALIAS else value


def mapped_types(*types):
    """Declare the value types a type handler converts."""
    def decorate(cls):
        cls.mapped_types = tuple(types)
        return cls
    return decorate


def mapped_jdbc_types(*jdbc_types, include_null_jdbc_type: bool = False):
    """Declare the column types a type handler is registered for."""
    def decorate(cls):
        cls.mapped_jdbc_types = tuple(jdbc_types)
        cls.include_null_jdbc_type = include_null_jdbc_type
        return cls
    return decorate
