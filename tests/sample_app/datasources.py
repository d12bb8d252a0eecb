"""Data sources that answer a product name without a database server."""

from sqlmap_config.exceptions import DataSourceError
from sqlmap_config.interfaces import DataSourceFactory


class FakeConnection:
    def __init__(self, product_name):
        self.product_name = product_name
        self.closed = False
        self.autocommit = False

    def getinfo(self, info_type):
        return self.product_name

    def close(self):
        self.closed = True


class FakeDataSource:
    def __init__(self, product_name=None, fail=False):
        self.product_name = product_name
        self.fail = fail
        self.connections = []

    def get_connection(self):
        if self.fail:
            raise DataSourceError("database is unreachable")
        connection = FakeConnection(self.product_name)
        self.connections.append(connection)
        return connection

    def __repr__(self):
        return f"FakeDataSource({self.product_name!r})"


class FakeDataSourceFactory(DataSourceFactory):
    """Configured with productName and fail properties."""

    def __init__(self):
        self.data_source = FakeDataSource()

    def set_properties(self, properties):
        self.data_source.product_name = properties.get('productName')
        self.data_source.fail = properties.get('fail', 'false') == 'true'

    def get_data_source(self):
        return self.data_source
