"""
ODBC data source opening a new pyodbc connection for every request.

The data source is configured from the <property> children of an environment's
<dataSource type="UNPOOLED"> element. A full connection string can be given with
"url"; otherwise one is built from driver/server/database and the credentials,
following the same layout as the SQL Server connection strings used elsewhere.
Properties prefixed with "driver." are appended to the connection string verbatim.
"""

import logging
from typing import Any, Dict, Optional

import pyodbc

from ..exceptions import DataSourceError
from ..interfaces import DataSourceFactory

DRIVER_PROPERTY_PREFIX = "driver."


class UnpooledDataSource:
    """Lazily connecting pyodbc data source."""

    def __init__(self, driver: Optional[str] = None, url: Optional[str] = None,
                 username: Optional[str] = None, password: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.driver = driver
        self.url = url
        self.username = username
        self.password = password
        self.server: Optional[str] = None
        self.database: Optional[str] = None
        self.trusted_connection = False
        self.auto_commit: Optional[bool] = None
        self.login_timeout: Optional[int] = None
        self.default_transaction_isolation_level: Optional[int] = None
        self.driver_properties: Dict[str, str] = {}

    def get_connection_string(self) -> str:
        """
        Build the ODBC connection string.

        Returns:
            self.url when set, otherwise a string assembled from the individual properties

        Raises:
            DataSourceError: If neither a url nor a driver is configured
        """
        if self.url:
            connection_string = self.url if self.url.endswith(';') else self.url + ';'
        else:
            if not self.driver:
                raise DataSourceError("UNPOOLED data source requires either a 'url' or a 'driver' property")
            connection_string = f"DRIVER={{{self.driver}}};"
            if self.server:
                connection_string += f"SERVER={self.server};"
            if self.database:
                connection_string += f"DATABASE={self.database};"
            if self.trusted_connection:
                connection_string += "Trusted_Connection=yes;"
        if self.username is not None and not self.trusted_connection:
            connection_string += f"UID={self.username};"
        if self.password is not None and not self.trusted_connection:
            connection_string += f"PWD={self.password};"
        for key, value in self.driver_properties.items():
            connection_string += f"{key}={value};"
        return connection_string

    def get_connection(self):
        """
        Open a new pyodbc connection.

        Raises:
            DataSourceError: If the connection cannot be opened
        """
        kwargs: Dict[str, Any] = {}
        if self.auto_commit is not None:
            kwargs['autocommit'] = self.auto_commit
        if self.login_timeout is not None:
            kwargs['timeout'] = self.login_timeout
        try:
            connection = pyodbc.connect(self.get_connection_string(), **kwargs)
        except pyodbc.Error as e:
            raise DataSourceError(f"Error opening ODBC connection. Cause: {e}") from e
        self.logger.debug(f"Opened ODBC connection to {self.server or self.driver or 'url'}")
        return connection

    def __repr__(self) -> str:
        target = self.url and '<url>' or f"{self.driver}@{self.server}/{self.database}"
        return f"UnpooledDataSource({target})"


class UnpooledDataSourceFactory(DataSourceFactory):
    """Builds an UnpooledDataSource from <property> children."""

    # property name -> (attribute, converter)
    PROPERTIES = {
        'driver': ('driver', str),
        'url': ('url', str),
        'username': ('username', str),
        'password': ('password', str),
        'server': ('server', str),
        'database': ('database', str),
        'trustedConnection': ('trusted_connection', lambda value: value.strip().lower() == 'true'),
        'autoCommit': ('auto_commit', lambda value: value.strip().lower() == 'true'),
        'loginTimeout': ('login_timeout', int),
        'defaultTransactionIsolationLevel': ('default_transaction_isolation_level', int),
    }

    def __init__(self):
        self.data_source = UnpooledDataSource()

    def set_properties(self, properties: Dict[str, str]) -> None:
        """
        Apply <property> values to the data source.

        Raises:
            DataSourceError: For an unknown property name or an unconvertible value
        """
        for name, value in properties.items():
            if name.startswith(DRIVER_PROPERTY_PREFIX):
                self.data_source.driver_properties[name[len(DRIVER_PROPERTY_PREFIX):]] = value
                continue
            if name not in self.PROPERTIES:
                raise DataSourceError(f"Unknown DataSource property: {name}")
            attribute, converter = self.PROPERTIES[name]
            try:
                setattr(self.data_source, attribute, converter(value))
            except ValueError as e:
                raise DataSourceError(f"Invalid value '{value}' for DataSource property {name}") from e

    def get_data_source(self) -> UnpooledDataSource:
        return self.data_source
