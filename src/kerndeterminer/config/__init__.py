"""Configuration management for kerndeterminer.

This module provides configuration management using Pydantic models.

Key classes:
- SolverConfig: Kern search tolerances and budgets
- ProcessingConfig: Batch query settings
- LoggingConfig: Logging settings
- KernSettings: Main settings
"""

from kerndeterminer.config.settings import (
    KernSettings,
    LoggingConfig,
    ProcessingConfig,
    SolverConfig,
    get_default_settings,
)

__all__ = [
    "KernSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "SolverConfig",
    "get_default_settings",
]
