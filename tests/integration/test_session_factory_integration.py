"""
Integration tests for SessionFactoryBuilder and DefaultSessionFactory.
"""

import pytest

from sqlmap_config.exceptions import ConfigurationParseError, TransactionError
from sqlmap_config.session.configuration import Configuration
from sqlmap_config.session.session_factory import SessionFactoryBuilder
from sqlmap_config.transaction.transactions import OdbcTransaction


def test_build_from_document(sample_config_path):
    factory = SessionFactoryBuilder().build(sample_config_path)
    configuration = factory.get_configuration()
    assert configuration.environment.id == "development"

    transaction = factory.open_transaction(autocommit=True)
    assert isinstance(transaction, OdbcTransaction)
    connection = transaction.get_connection()
    assert connection.autocommit is True
    assert connection.product_name == "Microsoft SQL Server"


def test_build_with_environment_override(sample_config_path):
    factory = SessionFactoryBuilder().build(sample_config_path, environment="production")
    assert factory.get_configuration().environment.id == "production"


def test_build_from_configuration():
    configuration = Configuration()
    assert SessionFactoryBuilder().build(configuration).get_configuration() is configuration


def test_open_transaction_without_environment():
    factory = SessionFactoryBuilder().build("<configuration/>")
    with pytest.raises(TransactionError):
        factory.open_transaction()


def test_build_failure_propagates():
    with pytest.raises(ConfigurationParseError):
        SessionFactoryBuilder().build('<configuration><settings><setting name="x" value="y"/></settings></configuration>')
