"""
Vendor database id provider.

Asks the active data source for its DBMS product name. With no properties, the
product name itself is the database id. With properties, each property name is
matched as a substring of the product name and the first match's value is used.
"""

import logging
from typing import Any, Dict, Optional

import pyodbc

from ..exceptions import DataSourceError
from ..interfaces import DatabaseIdProvider


class VendorDatabaseIdProvider(DatabaseIdProvider):
    """Maps the ODBC DBMS product name to a database id."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.properties: Dict[str, str] = {}

    def set_properties(self, properties: Dict[str, str]) -> None:
        self.properties = dict(properties)

    def get_database_id(self, data_source: Any) -> Optional[str]:
        """
        Determine the database id for data_source.

        Connection failures are logged and yield None, so a configuration can still
        be built while the database is unreachable.
        """
        if data_source is None:
            raise ValueError("dataSource cannot be null")
        try:
            product_name = self._get_database_product_name(data_source)
        except (pyodbc.Error, DataSourceError) as e:
            self.logger.warning(f"Could not get a databaseId from dataSource: {e}")
            return None

        if not self.properties:
            return product_name
        for key, value in self.properties.items():
            if key in product_name:
                return value
        return None

    def _get_database_product_name(self, data_source: Any) -> str:
        connection = data_source.get_connection()
        try:
            return connection.getinfo(pyodbc.SQL_DBMS_NAME)
        finally:
            connection.close()
