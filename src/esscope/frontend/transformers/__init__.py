"""
esscope AST Transformers
========================

Parse tree to AST conversion.
"""

from .base import EsscopeTransformer
from .literals import LiteralParser

__all__ = [
    'EsscopeTransformer',
    'LiteralParser',
]
