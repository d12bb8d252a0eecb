"""
Entry point turning a configuration document into a session factory.

The factory only hands out the assembled Configuration and transactions for the
active environment; statement execution belongs to the data-access runtime.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .configuration import Configuration
from ..exceptions import TransactionError
from ..interfaces import Transaction


class DefaultSessionFactory:
    """Holds a built Configuration for the lifetime of the process."""

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    def get_configuration(self) -> Configuration:
        return self.configuration

    def open_transaction(self, autocommit: bool = False, level: Optional[int] = None) -> Transaction:
        """
        Create a transaction for the active environment.

        The connection is not opened until the transaction is first used.

        Raises:
            TransactionError: If the configuration has no active environment
        """
        environment = self.configuration.environment
        if environment is None:
            raise TransactionError(
                "Cannot open a transaction: the configuration has no active environment "
                f"(requested: {self.configuration.requested_environment_id!r})")
        return environment.transaction_factory.new_transaction(environment.data_source, level, autocommit)


class SessionFactoryBuilder:
    """Builds a DefaultSessionFactory from a configuration document or Configuration."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def build(self, source: Union[str, bytes, os.PathLike, Any, Configuration],
              environment: Optional[str] = None, properties: Optional[Dict[str, str]] = None,
              base_path: Optional[Union[str, Path]] = None) -> DefaultSessionFactory:
        """
        Assemble a configuration and wrap it in a session factory.

        Args:
            source: Configuration document (XML text, bytes, path, file object) or a
                    ready Configuration
            environment: Optional target environment id
            properties: Optional substitution variables
            base_path: Optional directory for relative resources

        Raises:
            ConfigurationParseError: If the document cannot be assembled
        """
        if isinstance(source, Configuration):
            return DefaultSessionFactory(source)
        from ..builder.config_builder import XMLConfigBuilder
        builder = XMLConfigBuilder(source, environment, properties, base_path)
        configuration = builder.parse()
        self.logger.info("Session factory built")
        return DefaultSessionFactory(configuration)
