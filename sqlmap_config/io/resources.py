"""
Resource loading for property files and mapper documents.

A "resource" is a path relative to the configuration's base path, the current
directory or an importable package (``mypackage/mappers/user.xml``). A "url" is
fetched with requests, except for ``file://`` URLs which are read from disk.
"""

import importlib
import importlib.resources
import importlib.util
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import unquote, urlparse

import requests
import yaml

from ..exceptions import ResourceLoadError

logger = logging.getLogger(__name__)

URL_TIMEOUT_SECONDS = 30


def get_resource_as_bytes(resource: str, base_path: Optional[Union[str, Path]] = None) -> bytes:
    """
    Read a resource.

    Lookup order: absolute path, base_path / resource, current directory / resource,
    then package data of the longest importable package prefix.

    Args:
        resource: Resource path using "/" separators
        base_path: Optional directory that relative resources are resolved against

    Returns:
        Raw resource content

    Raises:
        ResourceLoadError: If the resource cannot be found or read
    """
    path = _find_file(resource, base_path)
    if path is not None:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceLoadError(f"Failed to read resource {path}: {e}", resource) from e

    package_file = _find_package_file(resource)
    if package_file is not None:
        logger.debug(f"Loading resource {resource} from package data")
        return package_file.read_bytes()

    raise ResourceLoadError(f"Could not find resource {resource}", resource)


def get_url_as_bytes(url: str) -> bytes:
    """
    Fetch a URL.

    Raises:
        ResourceLoadError: If the URL cannot be fetched (no retry)
    """
    parsed = urlparse(url)
    if parsed.scheme == 'file':
        path = Path(unquote(parsed.path))
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceLoadError(f"Failed to read URL {url}: {e}", url) from e

    try:
        response = requests.get(url, timeout=URL_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ResourceLoadError(f"Failed to fetch URL {url}: {e}", url) from e
    return response.content


def get_resource_as_properties(resource: str, base_path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    return load_properties(get_resource_as_bytes(resource, base_path), resource)


def get_url_as_properties(url: str) -> Dict[str, str]:
    return load_properties(get_url_as_bytes(url), urlparse(url).path)


def load_properties(content: bytes, name: str) -> Dict[str, str]:
    """
    Parse property file content, dispatching on the file suffix.

    .yaml/.yml and .json files must contain a top-level mapping; everything else is
    read as a Java-style .properties file.

    Args:
        content: Raw file content
        name: File name or path used to pick the format and in error messages

    Returns:
        Flat mapping of property name to string value
    """
    suffix = Path(name).suffix.lower()
    text = content.decode('utf-8')
    try:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(text) or {}
        elif suffix == '.json':
            data = json.loads(text)
        else:
            return parse_properties(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ResourceLoadError(f"Failed to parse property file {name}: {e}", name) from e

    if not isinstance(data, dict):
        raise ResourceLoadError(f"Property file {name} must contain a mapping at the top level", name)
    return {str(key): _stringify(value) for key, value in data.items()}


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse Java-style .properties text.

    Supports "key=value", "key: value" and "key value" lines, "#" and "!" comments,
    and backslash line continuations.
    """
    properties = {}
    logical_line = ''
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if not logical_line and (not line or line[0] in '#!'):
            continue
        if _ends_with_continuation(line):
            logical_line += line[:-1]
            continue
        logical_line += line
        key, value = _split_property(logical_line)
        properties[key] = value
        logical_line = ''
    if logical_line:
        key, value = _split_property(logical_line)
        properties[key] = value
    return properties


def class_for_name(name: str) -> type:
    """
    Import a type from a dotted path such as "package.module.ClassName".

    Raises:
        ImportError: If the module or attribute cannot be found
    """
    module_name, _, attribute = name.rpartition('.')
    if not module_name:
        raise ImportError(f"'{name}' is not a dotted path")
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        # Nested classes: "package.module.Outer.Inner"
        outer = class_for_name(module_name)
        if not hasattr(outer, attribute):
            raise ImportError(f"'{module_name}' has no attribute '{attribute}'")
        return getattr(outer, attribute)
    if not hasattr(module, attribute):
        raise ImportError(f"module '{module_name}' has no attribute '{attribute}'")
    return getattr(module, attribute)


def _find_file(resource: str, base_path: Optional[Union[str, Path]]) -> Optional[Path]:
    candidate = Path(resource)
    if candidate.is_absolute():
        return candidate if candidate.is_file() else None
    for root in [base_path, Path.cwd()]:
        if root is None:
            continue
        path = Path(root) / resource
        if path.is_file():
            return path
    return None


def _find_package_file(resource: str):
    parts = resource.strip('/').split('/')
    for i in range(len(parts) - 1, 0, -1):
        package = '.'.join(parts[:i])
        try:
            spec = importlib.util.find_spec(package)
        except (ImportError, ValueError):
            continue
        # Regular packages only; namespace directories are reached through their parent
        if spec is None or spec.origin is None or spec.submodule_search_locations is None:
            continue
        candidate = importlib.resources.files(package).joinpath('/'.join(parts[i:]))
        if candidate.is_file():
            return candidate
    return None


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip('\\'))
    return backslashes % 2 == 1


def _split_property(line: str):
    for index, char in enumerate(line):
        if char in '=:' or char.isspace():
            key = line[:index]
            rest = line[index:].lstrip()
            if char.isspace() and rest[:1] in ('=', ':'):
                rest = rest[1:]
            elif not char.isspace():
                rest = rest[1:]
            return _unescape(key), _unescape(rest.lstrip())
    return _unescape(line), ''


def _unescape(value: str) -> str:
    return (value.replace('\\:', ':').replace('\\=', '=').replace('\\ ', ' ')
            .replace('\\t', '\t').replace('\\n', '\n').replace('\\\\', '\\'))


def _stringify(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return '' if value is None else str(value)
