"""Configuration and session factory components."""

from .configuration import Configuration, SETTINGS
from .session_factory import DefaultSessionFactory, SessionFactoryBuilder

__all__ = ['Configuration', 'SETTINGS', 'DefaultSessionFactory', 'SessionFactoryBuilder']
