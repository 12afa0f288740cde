"""
Logging module for the application.
This module provides functionality to set up console logging for the bootstrap.
"""

from .setup import setup_logging

__all__ = ["setup_logging"]
