"""Transaction factories."""

from .transactions import ManagedTransactionFactory, OdbcTransactionFactory

__all__ = ['ManagedTransactionFactory', 'OdbcTransactionFactory']
