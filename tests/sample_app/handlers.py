"""Custom type handlers registered through <typeHandlers>."""

from decimal import Decimal

from sqlmap_config.models import JdbcType
from sqlmap_config.type.annotations import mapped_jdbc_types, mapped_types
from sqlmap_config.type.type_handlers import BaseTypeHandler


class Money:
    def __init__(self, amount: Decimal = Decimal("0")):
        self.amount = Decimal(amount)


@mapped_types(Money)
@mapped_jdbc_types(JdbcType.DECIMAL, JdbcType.NUMERIC, include_null_jdbc_type=True)
class MoneyTypeHandler(BaseTypeHandler):
    def to_database(self, value, jdbc_type=None):
        return value.amount

    def from_database(self, value):
        return Money(value)


class YesNoTypeHandler(BaseTypeHandler):
    """Stores booleans as 'Y'/'N'; registered explicitly with javaType/jdbcType."""

    def to_database(self, value, jdbc_type=None):
        return 'Y' if value else 'N'

    def from_database(self, value):
        return value == 'Y'
