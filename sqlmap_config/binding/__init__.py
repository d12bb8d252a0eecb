"""Mapper registry components."""

from .mapper_registry import MapperProxy, MapperProxyFactory, MapperRegistry

__all__ = ['MapperProxy', 'MapperProxyFactory', 'MapperRegistry']
