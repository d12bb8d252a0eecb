"""Interceptor chain components."""

from .interceptor_chain import InterceptorChain, Invocation, Plugin

__all__ = ['InterceptorChain', 'Invocation', 'Plugin']
