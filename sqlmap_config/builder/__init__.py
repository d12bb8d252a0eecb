"""Configuration and mapper document builders."""

from .config_builder import XMLConfigBuilder
from .mapper_builder import XMLMapperBuilder

__all__ = ['XMLConfigBuilder', 'XMLMapperBuilder']
