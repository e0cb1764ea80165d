"""Utility functions for kerndeterminer.

This module provides:

- Logging setup and configuration
"""

from kerndeterminer.utils.logging import configure_logging

__all__ = [
    "configure_logging",
]
