"""
Local package for the Exhibitor web bootstrap.

This package provides the property sources the bootstrap reads and the
supervisor lifecycle package built on top of them.
"""

from .config import PropertySource, PropertySourceReader

__all__ = ["PropertySource", "PropertySourceReader"]
