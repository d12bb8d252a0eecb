"""
XML document navigation for configuration and mapper documents.

This module wraps lxml with the small navigation surface the section parsers need:
locate a node by path, enumerate element children, read attributes with ${name}
substitution, and flatten <property name="" value=""/> children into a dict.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from . import property_parser
from ..exceptions import DocumentParsingError


class XPathParser:
    """
    Parsed, read-only XML document with mutable substitution variables.

    Variables are read at attribute-access time, so variables installed by the
    properties section apply to every section parsed afterwards.
    """

    def __init__(self, source: Union[str, bytes, os.PathLike, Any],
                 variables: Optional[Dict[str, str]] = None, resource: Optional[str] = None):
        """
        Parse the document.

        Args:
            source: XML text, XML bytes, a filesystem path or a readable file object
            variables: Initial substitution variables
            resource: Optional label of the document used in error messages

        Raises:
            DocumentParsingError: If the document cannot be read or is malformed
        """
        self.logger = logging.getLogger(__name__)
        self.variables: Dict[str, str] = dict(variables or {})
        self.resource = resource
        self.document = self._create_document(source)

    def set_variables(self, variables: Optional[Dict[str, str]]) -> None:
        self.variables = dict(variables or {})

    def eval_node(self, expression: str, root: Any = None) -> Optional['XNode']:
        """
        Locate the first element matching an XPath expression.

        Args:
            expression: XPath expression, absolute or relative to root
            root: Optional lxml element to evaluate against (defaults to the document)

        Returns:
            XNode for the first matching element, or None
        """
        context = self.document if root is None else root
        try:
            matches = context.xpath(expression)
        except etree.XPathError as e:
            raise DocumentParsingError(f"Error evaluating XPath '{expression}': {e}",
                                       resource=self.resource) from e
        for match in matches:
            if isinstance(match, etree._Element) and isinstance(match.tag, str):
                return XNode(self, match)
        return None

    def eval_nodes(self, expression: str, root: Any = None) -> List['XNode']:
        context = self.document if root is None else root
        return [XNode(self, match) for match in context.xpath(expression)
                if isinstance(match, etree._Element) and isinstance(match.tag, str)]

    def _create_document(self, source: Any):
        """Read source and build the lxml tree."""
        content = self._read_source(source)
        if not content or not content.strip():
            raise DocumentParsingError("XML document is empty or None", resource=self.resource)

        parser = etree.XMLParser(
            remove_comments=True,
            resolve_entities=False,  # Security: don't resolve external entities
            no_network=True,  # Security: disable network access
            load_dtd=False,
        )
        try:
            root = etree.fromstring(content, parser)
        except etree.XMLSyntaxError as e:
            text = content.decode('utf-8', errors='replace')
            raise DocumentParsingError(f"XML syntax error: {e}", text, self.resource) from e
        return root.getroottree()

    def _read_source(self, source: Any) -> bytes:
        if isinstance(source, bytes):
            return source
        if hasattr(source, 'read'):
            data = source.read()
            return data if isinstance(data, bytes) else data.encode('utf-8')
        if isinstance(source, str) and source.lstrip().startswith('<'):
            return source.encode('utf-8')
        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            if self.resource is None:
                self.resource = str(path)
            try:
                return path.read_bytes()
            except OSError as e:
                raise DocumentParsingError(f"Failed to read XML document {path}: {e}",
                                           resource=str(path)) from e
        raise DocumentParsingError(f"Unsupported XML source type: {type(source).__name__}")


class XNode:
    """A single element of a parsed document."""

    def __init__(self, parser: XPathParser, element):
        self.parser = parser
        self.element = element
        self.name = etree.QName(element).localname

    @property
    def variables(self) -> Dict[str, str]:
        return self.parser.variables

    def eval_node(self, expression: str) -> Optional['XNode']:
        return self.parser.eval_node(expression, self.element)

    def eval_nodes(self, expression: str) -> List['XNode']:
        return self.parser.eval_nodes(expression, self.element)

    def get_children(self) -> List['XNode']:
        """Return the direct element children in document order."""
        return [XNode(self.parser, child) for child in self.element
                if isinstance(child.tag, str)]

    def get_string_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self.element.get(name)
        if value is None:
            return default
        return property_parser.parse(value, self.variables)

    def get_boolean_attribute(self, name: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.get_string_attribute(name)
        if value is None:
            return default
        return value.strip().lower() == 'true'

    def get_int_attribute(self, name: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get_string_attribute(name)
        if value is None:
            return default
        return int(value)

    def get_attributes(self) -> Dict[str, str]:
        return {key: property_parser.parse(value, self.variables)
                for key, value in self.element.attrib.items()}

    def get_string_body(self, default: Optional[str] = None) -> Optional[str]:
        """Return the element's own text (before the first child) with placeholders substituted."""
        if self.element.text is None:
            return default
        return property_parser.parse(self.element.text, self.variables)

    def get_children_as_properties(self) -> Dict[str, str]:
        """
        Flatten <property name="..." value="..."/> style children into a dict.

        Children missing either attribute are ignored. Later duplicates win.
        """
        properties = {}
        for child in self.get_children():
            name = child.get_string_attribute('name')
            value = child.get_string_attribute('value')
            if name is not None and value is not None:
                properties[name] = value
        return properties

    def __repr__(self) -> str:
        return f"XNode(<{self.name}> {dict(self.element.attrib)})"
