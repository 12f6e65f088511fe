"""
Runtime Configuration

Central configuration for hash algorithm selection and logging.
The hash algorithm is chosen once at application start; every tree and
proof of that application then shares the resulting hasher.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


DEFAULT_STREAM_CHUNK_SIZE = 64 * 1024


@dataclass
class HashingConfig:
    """Configuration for the hashing capability."""
    algorithm: str = "sha256"
    stream_chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE

    def __post_init__(self):
        self.algorithm = self.algorithm.lower()
        if self.stream_chunk_size <= 0:
            raise ValueError(
                f"stream_chunk_size must be positive, got {self.stream_chunk_size}"
            )


@dataclass
class LoggingConfig:
    """Configuration for package logging."""
    level: str = "WARNING"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: hash algorithm name (sha256, sha512_256)
        - MERKLE_STREAM_CHUNK_SIZE: bytes read per chunk when hashing streams
        - MERKLE_LOG_LEVEL: logging level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM")
        if os.getenv("MERKLE_STREAM_CHUNK_SIZE"):
            overrides.setdefault("hashing", {})["stream_chunk_size"] = int(
                os.getenv("MERKLE_STREAM_CHUNK_SIZE", str(DEFAULT_STREAM_CHUNK_SIZE))
            )

        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            hashing=hashing,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hashing" in overrides:
            for key, value in overrides["hashing"].items():
                setattr(new_config.hashing, key, value)
            # re-run normalization
            new_config.hashing.__post_init__()

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
                "stream_chunk_size": self.hashing.stream_chunk_size,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "datefmt": self.logging.datefmt,
            },
            "extra": self.extra,
        }


def configure_logging(config: Optional[RuntimeConfig] = None) -> None:
    """Configure root logging from a runtime configuration."""
    config = config or get_default_config()
    log_level = getattr(logging, config.logging.level.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format=config.logging.format,
        datefmt=config.logging.datefmt,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def reset_default_config() -> None:
    """Drop the cached default configuration so the next call re-reads env vars."""
    global _default_config
    _default_config = None
