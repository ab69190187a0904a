"""
Runtime Configuration Module

Provides configuration loading and management for sum trees.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
