"""
Unit tests for the type handler registry and built-in handlers.
"""

import datetime
import decimal
import enum
import unittest

from sqlmap_config.exceptions import TypeHandlerRegistrationError
from sqlmap_config.models import JdbcType
from sqlmap_config.type.type_handler_registry import TypeHandlerRegistry
from sqlmap_config.type.type_handlers import (
    BooleanTypeHandler, DateTimeTypeHandler, DateTypeHandler, EnumOrdinalTypeHandler,
    EnumTypeHandler, IntegerTypeHandler, ObjectTypeHandler, SqlTimestampTypeHandler,
    StringTypeHandler,
)

from sample_app.domain import Status
from sample_app.handlers import Money, MoneyTypeHandler, YesNoTypeHandler


class Priority(enum.Enum):
    LOW = 1
    HIGH = 2


class CustomString(str):
    pass


class TestDefaultHandlers(unittest.TestCase):
    """Test lookups against the pre-registered handlers."""

    def setUp(self):
        self.registry = TypeHandlerRegistry()

    def test_date_timestamp_resolution(self):
        self.assertIsInstance(self.registry.get_type_handler(datetime.date, JdbcType.TIMESTAMP),
                              SqlTimestampTypeHandler)
        self.assertIsInstance(self.registry.get_type_handler(datetime.date), DateTypeHandler)
        self.assertIsInstance(self.registry.get_type_handler(datetime.date, JdbcType.VARCHAR), DateTypeHandler)

    def test_datetime_has_its_own_handler(self):
        self.assertIsInstance(self.registry.get_type_handler(datetime.datetime), DateTimeTypeHandler)
        self.assertNotIsInstance(self.registry.get_type_handler(datetime.datetime), SqlTimestampTypeHandler)

    def test_string_with_jdbc_type(self):
        self.assertIsInstance(self.registry.get_type_handler(str, JdbcType.NVARCHAR), StringTypeHandler)

    def test_subclass_falls_back_to_base_type(self):
        self.assertIsInstance(self.registry.get_type_handler(CustomString), StringTypeHandler)

    def test_unknown_type_has_no_handler(self):
        class Unrelated:
            pass
        self.assertIsNone(self.registry.get_type_handler(Unrelated))
        self.assertFalse(self.registry.has_type_handler(Unrelated))
        self.assertFalse(self.registry.has_type_handler(None))

    def test_object_handler(self):
        self.assertIsInstance(self.registry.get_type_handler(object), ObjectTypeHandler)

    def test_enum_handler_created_on_demand(self):
        handler = self.registry.get_type_handler(Status)
        self.assertIsInstance(handler, EnumTypeHandler)
        self.assertIs(handler.enum_type, Status)
        self.assertIs(self.registry.get_type_handler(Status).enum_type, Status)

    def test_enum_lookup_leaves_registry_unchanged(self):
        registered = dict(self.registry.get_type_handler_map())
        self.assertTrue(self.registry.has_type_handler(Status))
        self.registry.get_type_handler(Status)
        self.assertEqual(dict(self.registry.get_type_handler_map()), registered)
        self.assertNotIn(Status, self.registry.get_type_handler_map())

    def test_default_enum_handler_can_be_replaced(self):
        self.registry.default_enum_type_handler = EnumOrdinalTypeHandler
        handler = self.registry.get_type_handler(Priority)
        self.assertIsInstance(handler, EnumOrdinalTypeHandler)
        self.assertEqual(handler.to_database(Priority.HIGH), 1)

    def test_mapping_type_handler_lookup(self):
        self.assertIsInstance(self.registry.get_mapping_type_handler(IntegerTypeHandler), IntegerTypeHandler)


class TestRegistration(unittest.TestCase):
    """Test the register() forms."""

    def setUp(self):
        self.registry = TypeHandlerRegistry()

    def test_handler_only_uses_declared_types(self):
        self.registry.register(MoneyTypeHandler)
        handler = self.registry.get_type_handler(Money, JdbcType.DECIMAL)
        self.assertIsInstance(handler, MoneyTypeHandler)
        self.assertIs(self.registry.get_type_handler(Money, JdbcType.NUMERIC), handler)
        self.assertIs(self.registry.get_type_handler(Money), handler)

    def test_explicit_value_and_jdbc_type(self):
        self.registry.register(bool, JdbcType.CHAR, YesNoTypeHandler)
        self.assertIsInstance(self.registry.get_type_handler(bool, JdbcType.CHAR), YesNoTypeHandler)
        self.assertIsInstance(self.registry.get_type_handler(bool), BooleanTypeHandler)

    def test_value_type_with_handler_class_taking_type(self):
        self.registry.register(Priority, EnumOrdinalTypeHandler)
        handler = self.registry.get_type_handler(Priority)
        self.assertIsInstance(handler, EnumOrdinalTypeHandler)
        self.assertIs(handler.enum_type, Priority)

    def test_sole_handler_used_for_unmatched_jdbc_type(self):
        self.registry.register(Money, JdbcType.DECIMAL, MoneyTypeHandler())
        self.assertIsInstance(self.registry.get_type_handler(Money, JdbcType.VARCHAR), MoneyTypeHandler)

    def test_invalid_arguments(self):
        with self.assertRaises(TypeHandlerRegistrationError):
            self.registry.register()
        with self.assertRaises(TypeHandlerRegistrationError):
            self.registry.register(int, "VARCHAR", IntegerTypeHandler())
        with self.assertRaises(TypeHandlerRegistrationError):
            self.registry.register(int, object())

    def test_package_scan(self):
        self.registry.register_package('sample_app.handlers')
        self.assertIsInstance(self.registry.get_type_handler(Money), MoneyTypeHandler)
        self.assertIsNotNone(self.registry.get_mapping_type_handler(YesNoTypeHandler))

    def test_handler_map_view(self):
        handler_map = self.registry.get_type_handler_map()
        self.assertIn(JdbcType.TIMESTAMP, handler_map[datetime.date])


class TestBuiltinConversions(unittest.TestCase):
    """Test parameter and result conversions of the built-in handlers."""

    def test_none_passes_through(self):
        parameters = [object()]
        IntegerTypeHandler().set_parameter(parameters, 0, None)
        self.assertEqual(parameters, [None])
        self.assertIsNone(IntegerTypeHandler().get_result([None], 0))

    def test_boolean_as_bit(self):
        parameters = [None, None]
        handler = BooleanTypeHandler()
        handler.set_parameter(parameters, 0, True, JdbcType.BIT)
        handler.set_parameter(parameters, 1, False)
        self.assertEqual(parameters, [1, False])
        self.assertTrue(handler.get_result(['Y'], 0))

    def test_results_by_column_name(self):
        class Row:
            amount = '12.50'
        from sqlmap_config.type.type_handlers import DecimalTypeHandler
        self.assertEqual(DecimalTypeHandler().get_result(Row(), 'amount'), decimal.Decimal('12.50'))

    def test_date_from_datetime(self):
        value = datetime.datetime(2024, 5, 1, 13, 30)
        self.assertEqual(DateTypeHandler().get_result([value], 0), datetime.date(2024, 5, 1))
        self.assertEqual(SqlTimestampTypeHandler().get_result([value], 0), value)

    def test_enum_by_name(self):
        handler = EnumTypeHandler(Status)
        parameters = [None]
        handler.set_parameter(parameters, 0, Status.CLOSED)
        self.assertEqual(parameters, ['CLOSED'])
        self.assertIs(handler.get_result(['ACTIVE'], 0), Status.ACTIVE)
        with self.assertRaises(ValueError):
            handler.get_result(['UNKNOWN'], 0)


if __name__ == '__main__':
    unittest.main()
