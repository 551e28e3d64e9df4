"""
Runtime Configuration Module

Provides configuration loading and management for order construction.
"""

from .runtime import (
    ContractConfig,
    LoggingConfig,
    OrderDefaults,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ContractConfig",
    "LoggingConfig",
    "OrderDefaults",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
