"""
Interceptor chain and the proxy used to apply interceptors to a target.

plugin_all() wraps the target once per interceptor in registration order, so the
interceptor registered last is the outermost proxy and sees a call first.
"""

import logging
from typing import Any, Dict, List

from ..interfaces import Interceptor


class Invocation:
    """A single intercepted call."""

    def __init__(self, target: Any, method: str, args: tuple, kwargs: Dict[str, Any]):
        self.target = target
        self.method = method
        self.args = args
        self.kwargs = kwargs

    def proceed(self) -> Any:
        """Continue the call on the wrapped target (which may be another proxy)."""
        return getattr(self.target, self.method)(*self.args, **self.kwargs)

    def __repr__(self) -> str:
        return f"Invocation({self.method}, args={self.args!r})"


class Plugin:
    """
    Proxy routing calls on a target through an interceptor.

    Only methods listed in the interceptor's signatures (for a type the innermost
    target is an instance of) are intercepted; every other attribute is forwarded.
    """

    def __init__(self, target: Any, interceptor: Interceptor, methods):
        object.__setattr__(self, '_target', target)
        object.__setattr__(self, '_interceptor', interceptor)
        object.__setattr__(self, '_methods', methods)

    @staticmethod
    def wrap(target: Any, interceptor: Interceptor) -> Any:
        """
        Wrap target when the interceptor applies to it.

        Returns:
            A Plugin proxy, or target unchanged when no signature matches
        """
        methods = Plugin._matching_methods(unwrap(target), interceptor)
        if methods is None:
            return target
        return Plugin(target, interceptor, methods)

    @staticmethod
    def _matching_methods(target: Any, interceptor: Interceptor):
        signatures = getattr(interceptor, 'signatures', None)
        if not signatures:
            return frozenset()  # empty set means every public method
        methods = {method for target_type, method in signatures if isinstance(target, target_type)}
        return frozenset(methods) if methods else None

    def __getattr__(self, name: str) -> Any:
        attribute = getattr(self._target, name)
        if not callable(attribute) or name.startswith('_'):
            return attribute
        if self._methods and name not in self._methods:
            return attribute

        def intercepted(*args, **kwargs):
            return self._interceptor.intercept(Invocation(self._target, name, args, kwargs))
        intercepted.__name__ = name
        return intercepted

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._target, name, value)

    def __repr__(self) -> str:
        return f"Plugin({type(self._interceptor).__name__} -> {self._target!r})"


def unwrap(target: Any) -> Any:
    """Return the innermost object behind any number of Plugin proxies."""
    while isinstance(target, Plugin):
        target = object.__getattribute__(target, '_target')
    return target


class InterceptorChain:
    """Ordered list of interceptors."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._interceptors: List[Interceptor] = []

    def plugin_all(self, target: Any) -> Any:
        """Apply every interceptor to target in registration order."""
        for interceptor in self._interceptors:
            target = interceptor.plugin(target)
        return target

    def add_interceptor(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)
        self.logger.debug(f"Added interceptor {type(interceptor).__name__} at position {len(self._interceptors)}")

    def get_interceptors(self) -> List[Interceptor]:
        return list(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)
