"""
Minimal mapper document parser.

Reads one <mapper namespace="..."> document: collects <sql id> fragments into the
shared fragment pool, records <select|insert|update|delete> statements (respecting
databaseId) and binds the namespace to a mapper class when it names one.
"""

import logging
from typing import Any, Dict, Optional

from lxml import etree

from .base_builder import BaseBuilder
from ..exceptions import MapperElementError
from ..io import resources
from ..models import MappedStatement, SqlCommandType
from ..parsing import property_parser
from ..parsing.xml_parser import XNode, XPathParser
from ..session.configuration import Configuration

STATEMENT_TAGS = {
    'select': SqlCommandType.SELECT,
    'insert': SqlCommandType.INSERT,
    'update': SqlCommandType.UPDATE,
    'delete': SqlCommandType.DELETE,
}


class XMLMapperBuilder(BaseBuilder):
    """Parses a single mapper document into the shared Configuration."""

    def __init__(self, source: Any, configuration: Configuration, resource: str,
                 sql_fragments: Dict[str, XNode]):
        """
        Args:
            source: Mapper document (XML text, bytes, path or file object)
            configuration: Configuration being assembled
            resource: Resource label, used to skip documents that were already loaded
            sql_fragments: Shared <sql> fragment pool (usually configuration.sql_fragments)
        """
        super().__init__(configuration)
        self.logger = logging.getLogger(__name__)
        self.resource = resource
        self.sql_fragments = sql_fragments
        self.parser = XPathParser(source, configuration.variables, resource)
        self.namespace: Optional[str] = None

    def parse(self) -> None:
        if self.configuration.is_resource_loaded(self.resource):
            self.logger.debug(f"Mapper resource {self.resource} already loaded, skipping")
            return
        self._configuration_element(self.parser.eval_node('/mapper'))
        self.configuration.add_loaded_resource(self.resource)
        self._bind_mapper_for_namespace()

    def _configuration_element(self, context: Optional[XNode]) -> None:
        if context is None:
            raise MapperElementError(f"Mapper document {self.resource} has no <mapper> root element", self.resource)
        namespace = context.get_string_attribute('namespace')
        if not namespace:
            raise MapperElementError("Mapper's namespace cannot be empty", self.resource)
        self.namespace = namespace

        children = context.get_children()
        for child in children:
            if child.name == 'sql':
                self._sql_element(child)
        for child in children:
            if child.name in STATEMENT_TAGS:
                self._statement_element(child)

    def _sql_element(self, node: XNode) -> None:
        database_id = node.get_string_attribute('databaseId')
        if not self._database_id_matches(database_id):
            return
        fragment_id = self._apply_current_namespace(node.get_string_attribute('id'))
        existing = self.sql_fragments.get(fragment_id)
        if existing is not None and existing.get_string_attribute('databaseId') is not None and database_id is None:
            return
        self.sql_fragments[fragment_id] = node

    def _statement_element(self, node: XNode) -> None:
        database_id = node.get_string_attribute('databaseId')
        if not self._database_id_matches(database_id):
            return
        statement_id = self._apply_current_namespace(node.get_string_attribute('id'))
        language = self.configuration.language_registry.get_default_driver()
        lang = node.get_string_attribute('lang')
        if lang:
            driver_class = self.resolve_class(lang)
            self.configuration.language_registry.register(driver_class)
            language = self.configuration.language_registry.get_driver(driver_class)

        parameter_type = self.resolve_class(node.get_string_attribute('parameterType'))
        sql = language.create_sql_source(self._render(node.element, set()), parameter_type)
        self.configuration.add_mapped_statement(MappedStatement(
            id=statement_id,
            command_type=STATEMENT_TAGS[node.name],
            sql=sql,
            database_id=database_id,
            resource=self.resource,
            result_type=self.resolve_class(node.get_string_attribute('resultType')),
            parameter_type=parameter_type,
        ))

    def _render(self, element, including) -> str:
        """
        Flatten an element's text, expanding <include refid> from the fragment pool.

        Known ${name} placeholders are substituted from the configuration variables;
        unknown ones are left for the runtime.
        """
        parts = [self._text(element.text)]
        for child in element:
            if isinstance(child.tag, str):
                if etree.QName(child).localname == 'include':
                    parts.append(self._render_include(child, including))
                else:
                    parts.append(self._render(child, including))
            parts.append(self._text(child.tail))
        return ''.join(parts)

    def _text(self, text: Optional[str]) -> str:
        return property_parser.parse(text or '', self.parser.variables)

    def _render_include(self, element, including) -> str:
        refid = self._apply_current_namespace(element.get('refid'))
        if refid in including:
            raise MapperElementError(f"Circular <include> reference to {refid}", self.resource)
        fragment = self.sql_fragments.get(refid)
        if fragment is None:
            raise MapperElementError(f"Could not find SQL statement to include with refid '{refid}'", self.resource)
        return self._render(fragment.element, including | {refid})

    def _database_id_matches(self, database_id: Optional[str]) -> bool:
        return database_id is None or database_id == self.configuration.database_id

    def _apply_current_namespace(self, base: Optional[str]) -> str:
        if not base:
            raise MapperElementError("Element id cannot be empty", self.resource)
        if '.' in base:
            return base
        return f"{self.namespace}.{base}"

    def _bind_mapper_for_namespace(self) -> None:
        try:
            bound_type = resources.class_for_name(self.namespace)
        except ImportError:
            # Namespaces are not required to name a class
            return
        if isinstance(bound_type, type) and not self.configuration.has_mapper(bound_type):
            self.configuration.add_loaded_resource(f"namespace:{self.namespace}")
            self.configuration.add_mapper(bound_type)
