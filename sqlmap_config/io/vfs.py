"""
Virtual file system and package scanning.

Package scans (type aliases, type handlers, mappers) enumerate modules through a VFS
so a custom implementation can be installed with the vfsImpl setting.
"""

import importlib
import inspect
import logging
import pkgutil
from typing import Callable, Iterable, List, Optional

from ..interfaces import VFS


class DefaultVFS(VFS):
    """Enumerates a package and its sub-packages with pkgutil."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def list(self, package_name: str) -> Iterable[str]:
        package = importlib.import_module(package_name)
        names = [package.__name__]
        search_path = getattr(package, '__path__', None)
        if search_path is None:
            return names
        for module_info in pkgutil.walk_packages(search_path, prefix=f"{package.__name__}."):
            names.append(module_info.name)
        self.logger.debug(f"Found {len(names)} modules in package {package_name}")
        return names


class ResolverUtil:
    """Finds the classes defined in a package that satisfy a test."""

    def __init__(self, vfs: Optional[VFS] = None):
        self.vfs = vfs or DefaultVFS()

    def find(self, package_name: str, test: Callable[[type], bool]) -> List[type]:
        """
        Return every class defined in package_name's modules for which test() is true.

        Classes are returned in module order and, within a module, in definition order.
        Classes merely imported into a module are not reported for that module.
        """
        matches = []
        for module_name in self.vfs.list(package_name):
            module = importlib.import_module(module_name)
            members = [member for _, member in inspect.getmembers(module, inspect.isclass)
                       if member.__module__ == module.__name__]
            members.sort(key=_definition_line)
            for member in members:
                if test(member) and member not in matches:
                    matches.append(member)
        return matches

    def find_implementations(self, package_name: str, parent: type) -> List[type]:
        return self.find(package_name, lambda cls: issubclass(cls, parent))


def _definition_line(cls: type) -> int:
    try:
        return inspect.getsourcelines(cls)[1]
    except (OSError, TypeError):
        return 0
