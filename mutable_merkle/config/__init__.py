"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle tree core.
"""

from .runtime import (
    RuntimeConfig,
    HashingConfig,
    LoggingConfig,
    configure_logging,
    get_default_config,
    reset_default_config,
)

__all__ = [
    "RuntimeConfig",
    "HashingConfig",
    "LoggingConfig",
    "configure_logging",
    "get_default_config",
    "reset_default_config",
]
