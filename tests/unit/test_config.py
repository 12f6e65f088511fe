"""
Runtime Configuration Unit Tests
Tests for mutable_merkle/config/runtime.py
"""
import logging

import pytest

from mutable_merkle.config import (
    HashingConfig,
    RuntimeConfig,
    configure_logging,
    get_default_config,
)
from mutable_merkle.crypto.hashing import Sha512_256Hasher, create_hasher


class TestRuntimeConfig:
    """Tests for RuntimeConfig loading."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hashing.algorithm == "sha256"
        assert config.hashing.stream_chunk_size == 64 * 1024
        assert config.logging.level == "WARNING"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"hashing": {"algorithm": "SHA512_256"}})

        assert config.hashing.algorithm == "sha512_256"
        assert config.logging.level == "WARNING"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text(
            "hashing:\n"
            "  algorithm: sha512_256\n"
            "  stream_chunk_size: 1024\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hashing.algorithm == "sha512_256"
        assert config.hashing.stream_chunk_size == 1024
        assert config.logging.level == "DEBUG"
        assert isinstance(create_hasher(config.hashing), Sha512_256Hasher)

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).hashing.algorithm == "sha256"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "absent.yaml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "sha512_256")
        monkeypatch.setenv("MERKLE_STREAM_CHUNK_SIZE", "4096")
        monkeypatch.setenv("MERKLE_LOG_LEVEL", "INFO")

        config = RuntimeConfig.from_env()

        assert config.hashing.algorithm == "sha512_256"
        assert config.hashing.stream_chunk_size == 4096
        assert config.logging.level == "INFO"

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig.from_dict({"hashing": {"stream_chunk_size": 512}})
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "SHA512_256")

        config = base.with_env_overrides()

        assert config.hashing.algorithm == "sha512_256"
        assert config.hashing.stream_chunk_size == 512
        assert base.hashing.algorithm == "sha256"

    def test_with_env_overrides_noop(self, monkeypatch):
        monkeypatch.delenv("MERKLE_HASH_ALGORITHM", raising=False)
        monkeypatch.delenv("MERKLE_STREAM_CHUNK_SIZE", raising=False)
        monkeypatch.delenv("MERKLE_LOG_LEVEL", raising=False)
        base = RuntimeConfig()

        assert base.with_env_overrides() is base

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict(
            {"hashing": {"algorithm": "sha512_256"}, "extra": {"owner": "audit"}}
        )

        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            HashingConfig(stream_chunk_size=0)

    def test_default_config_cached(self, monkeypatch):
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "sha512_256")

        first = get_default_config()
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "sha256")

        assert get_default_config() is first
        assert first.hashing.algorithm == "sha512_256"


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_applies_level_to_fresh_root(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", logging.WARNING)

        configure_logging(RuntimeConfig.from_dict({"logging": {"level": "DEBUG"}}))

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
