"""
Runtime Configuration Module

Provides configuration loading and management for spvtree.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    LoggingConfig,
    OutputConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "LoggingConfig",
    "OutputConfig",
    "get_default_config",
    "set_default_config",
]
