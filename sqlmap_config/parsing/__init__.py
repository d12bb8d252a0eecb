"""Document navigation components."""

from .xml_parser import XNode, XPathParser

__all__ = ['XNode', 'XPathParser']
