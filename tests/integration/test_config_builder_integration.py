"""
Integration tests assembling the full sample configuration document.

The document under tests/fixtures exercises every section: a properties file with
inline defaults, settings, alias package scans, three plugins, two environments,
custom type handlers and two mapper documents bound to mapper classes.
"""

import datetime

import pytest

from sqlmap_config.builder.config_builder import XMLConfigBuilder
from sqlmap_config.datasource.unpooled import UnpooledDataSource
from sqlmap_config.exceptions import AlreadyParsedError
from sqlmap_config.models import ExecutorType, JdbcType, SqlCommandType
from sqlmap_config.transaction.transactions import ManagedTransactionFactory, OdbcTransactionFactory
from sqlmap_config.type.type_handlers import SqlTimestampTypeHandler

from sample_app.datasources import FakeDataSource
from sample_app.domain import Order, User
from sample_app.handlers import Money, MoneyTypeHandler, YesNoTypeHandler
from sample_app.mappers import OrderMapper, UserMapper
from sample_app.plugins import Executor


@pytest.fixture
def configuration(sample_config_path):
    return XMLConfigBuilder(sample_config_path).parse()


class TestSampleConfiguration:
    """Test the assembled Configuration of the sample document."""

    def test_default_environment(self, configuration):
        assert configuration.environment.id == "development"
        assert configuration.requested_environment_id == "development"
        assert isinstance(configuration.environment.transaction_factory, OdbcTransactionFactory)
        assert isinstance(configuration.environment.data_source, FakeDataSource)
        assert configuration.environment_resolved

    def test_property_file_overrides_inline_properties(self, configuration):
        assert configuration.variables["username"] == "scott"
        assert configuration.variables["environment.default"] == "development"
        assert configuration.variables["driver"] == "ODBC Driver 17 for SQL Server"

    def test_settings(self, configuration):
        assert configuration.cache_enabled is False
        assert configuration.default_statement_timeout == 25
        assert configuration.map_underscore_to_camel_case is True
        assert configuration.default_executor_type == ExecutorType.REUSE
        assert configuration.log_prefix == "sqlmap."
        assert configuration.lazy_loading_enabled is False

    def test_type_aliases(self, configuration):
        registry = configuration.type_alias_registry
        assert registry.resolve_alias("purchase") is Order
        assert registry.resolve_alias("MEMBER") is User
        assert registry.resolve_alias("order") is Order

    def test_interceptors_wrap_in_reverse_registration_order(self, configuration):
        executor = Executor()
        configuration.plugin(executor).query("select 1")
        assert executor.calls == ["C", "B", "A", "query"]

    def test_type_handlers(self, configuration):
        registry = configuration.type_handler_registry
        assert isinstance(registry.get_type_handler(Money, JdbcType.DECIMAL), MoneyTypeHandler)
        assert isinstance(registry.get_type_handler(bool, JdbcType.CHAR), YesNoTypeHandler)
        assert isinstance(registry.get_type_handler(datetime.date, JdbcType.TIMESTAMP), SqlTimestampTypeHandler)

    def test_mapper_documents(self, configuration):
        assert configuration.has_mapper(UserMapper)
        assert configuration.has_mapper(OrderMapper)

        find_by_id = configuration.mapped_statements["sample_app.mappers.UserMapper.find_by_id"]
        assert find_by_id.command_type is SqlCommandType.SELECT
        assert find_by_id.sql == "SELECT id, user_name FROM app.users WHERE id = ?"
        assert find_by_id.result_type is User
        assert find_by_id.parameter_type is int

        insert = configuration.mapped_statements["sample_app.mappers.UserMapper.insert_user"]
        assert insert.command_type is SqlCommandType.INSERT

        find_by_user = configuration.mapped_statements["sample_app.mappers.OrderMapper.find_by_user"]
        assert find_by_user.database_id is None
        assert find_by_user.sql == "SELECT id, user_id FROM orders WHERE user_id = ?"

    def test_loaded_resources(self, configuration):
        assert "mappers/UserMapper.xml" in configuration.loaded_resources
        assert "namespace:sample_app.mappers.OrderMapper" in configuration.loaded_resources


class TestBuilderContract:
    """Test the single-use and determinism guarantees."""

    def test_second_parse_fails(self, sample_config_path):
        builder = XMLConfigBuilder(sample_config_path)
        builder.parse()
        with pytest.raises(AlreadyParsedError):
            builder.parse()

    def test_same_inputs_give_equal_configurations(self, sample_config_path):
        first = XMLConfigBuilder(sample_config_path).parse()
        second = XMLConfigBuilder(sample_config_path).parse()
        assert first.get_configuration_summary() == second.get_configuration_summary()
        assert first.variables == second.variables

    def test_file_object_source_with_base_path(self, sample_config_path, fixtures_dir):
        with open(sample_config_path, "rb") as fh:
            configuration = XMLConfigBuilder(fh, base_path=fixtures_dir).parse()
        assert configuration.environment.id == "development"


class TestEnvironmentSelection:
    """Test explicit environment selection and caller-supplied properties."""

    def test_explicit_environment_with_caller_properties(self, sample_config_path):
        configuration = XMLConfigBuilder(sample_config_path, environment="production",
                                         properties={"username": "deployer"}).parse()
        environment = configuration.environment
        assert environment.id == "production"
        assert isinstance(environment.transaction_factory, ManagedTransactionFactory)
        assert environment.transaction_factory.close_connection is False
        assert isinstance(environment.data_source, UnpooledDataSource)
        assert environment.data_source.username == "deployer"
        assert environment.data_source.get_connection_string() == (
            "DRIVER={ODBC Driver 17 for SQL Server};SERVER=prod-db;DATABASE=app;UID=deployer;PWD=tiger;")

    def test_caller_properties_drive_default_environment(self, sample_config_path):
        configuration = XMLConfigBuilder(sample_config_path,
                                         properties={"environment.default": "production"}).parse()
        assert configuration.environment.id == "production"

    def test_undeclared_environment_is_reported_not_raised(self, sample_config_path, caplog):
        with caplog.at_level("WARNING"):
            configuration = XMLConfigBuilder(sample_config_path, environment="qa").parse()
        assert configuration.environment is None
        assert configuration.requested_environment_id == "qa"
        assert not configuration.environment_resolved
        assert "qa" in caplog.text
        # Later sections still run
        assert configuration.has_mapper(UserMapper)

    def test_requested_environment_without_environments_section(self, caplog):
        with caplog.at_level("WARNING"):
            configuration = XMLConfigBuilder("<configuration/>", environment="qa").parse()
        assert configuration.environment is None
        assert configuration.requested_environment_id == "qa"
        assert not configuration.environment_resolved
        assert "qa" in caplog.text

    def test_no_environments_section_and_no_request(self):
        configuration = XMLConfigBuilder("<configuration/>").parse()
        assert configuration.requested_environment_id is None
        assert configuration.environment_resolved
