"""Data source factories."""

from .unpooled import UnpooledDataSource, UnpooledDataSourceFactory

__all__ = ['UnpooledDataSource', 'UnpooledDataSourceFactory']
