"""
esscope utilities package
"""

from .io_utils import read_source_file

__all__ = ["read_source_file"]
