"""Vendor id providers."""

from .database_id_provider import VendorDatabaseIdProvider

__all__ = ['VendorDatabaseIdProvider']
