"""
Transactions and transaction factories.

OdbcTransaction commits and rolls back on the connection it draws from the data
source. ManagedTransaction leaves commit and rollback to an external container and
only closes the connection (unless closeConnection is false).
"""

import logging
from typing import Any, Dict, Optional

import pyodbc

from ..exceptions import TransactionError
from ..interfaces import Transaction, TransactionFactory


class OdbcTransaction(Transaction):
    """Transaction over a pyodbc connection opened on first use."""

    def __init__(self, data_source: Any, level: Optional[int] = None, autocommit: bool = False):
        self.logger = logging.getLogger(__name__)
        self.data_source = data_source
        self.level = level
        self.autocommit = autocommit
        self.connection = None

    def get_connection(self):
        if self.connection is None:
            self._open_connection()
        return self.connection

    def commit(self) -> None:
        if self.connection is not None and not self.connection.autocommit:
            self.logger.debug(f"Committing ODBC connection {self.connection!r}")
            self._run('commit')

    def rollback(self) -> None:
        if self.connection is not None and not self.connection.autocommit:
            self.logger.debug(f"Rolling back ODBC connection {self.connection!r}")
            self._run('rollback')

    def close(self) -> None:
        if self.connection is not None:
            self._run('close')
            self.connection = None

    def _open_connection(self) -> None:
        self.connection = self.data_source.get_connection()
        self.connection.autocommit = self.autocommit
        if self.level is not None:
            self.connection.set_attr(pyodbc.SQL_ATTR_TXN_ISOLATION, self.level)

    def _run(self, operation: str) -> None:
        try:
            getattr(self.connection, operation)()
        except pyodbc.Error as e:
            raise TransactionError(f"Error during {operation} of ODBC connection. Cause: {e}") from e


class ManagedTransaction(Transaction):
    """Transaction whose commit and rollback are handled by the surrounding container."""

    def __init__(self, data_source: Any, level: Optional[int] = None, close_connection: bool = True):
        self.data_source = data_source
        self.level = level
        self.close_connection = close_connection
        self.connection = None

    def get_connection(self):
        if self.connection is None:
            self.connection = self.data_source.get_connection()
        return self.connection

    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        pass

    def close(self) -> None:
        if self.close_connection and self.connection is not None:
            self.connection.close()
            self.connection = None


class OdbcTransactionFactory(TransactionFactory):
    """Creates OdbcTransaction objects."""

    def new_transaction(self, data_source: Any, level: Optional[int] = None,
                        autocommit: bool = False) -> OdbcTransaction:
        return OdbcTransaction(data_source, level, autocommit)


class ManagedTransactionFactory(TransactionFactory):
    """Creates ManagedTransaction objects; honours the closeConnection property."""

    def __init__(self):
        self.close_connection = True

    def set_properties(self, properties: Dict[str, str]) -> None:
        value = properties.get('closeConnection')
        if value is not None:
            self.close_connection = value.strip().lower() == 'true'

    def new_transaction(self, data_source: Any, level: Optional[int] = None,
                        autocommit: bool = False) -> ManagedTransaction:
        # Autocommit is ignored: the container owns the connection's commit behaviour
        return ManagedTransaction(data_source, level, self.close_connection)
