"""
Runtime Configuration

Central configuration for commitment hashing, tree construction and logging.
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

from sumtree.crypto.hashing import HASH_FUNCTIONS
from sumtree.schemas.errors import SchemaValidationException

load_dotenv()


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Configuration for sum tree construction."""
    # Memoize subtree commitments so repeated proofs reuse work
    cache_subtrees: bool = True


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = "sha256"
    tree: TreeConfig = field(default_factory=TreeConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.hash_algorithm = str(self.hash_algorithm).lower()
        if self.hash_algorithm not in HASH_FUNCTIONS:
            raise SchemaValidationException(
                message=f"Unsupported hash algorithm: {self.hash_algorithm!r}",
                field_path="hash_algorithm",
                details={"supported": sorted(HASH_FUNCTIONS)},
            )
        self.log_level = str(self.log_level).upper()

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SUMTREE_HASH_ALGORITHM: Digest primitive (sha256, blake2b)
        - SUMTREE_CACHE_SUBTREES: Memoize subtree commitments (true/false)
        - SUMTREE_LOG_LEVEL: Log level name
        - SUMTREE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("SUMTREE_HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv("SUMTREE_HASH_ALGORITHM")

        if os.getenv("SUMTREE_CACHE_SUBTREES"):
            overrides.setdefault("tree", {})["cache_subtrees"] = _env_flag(
                "SUMTREE_CACHE_SUBTREES", "true"
            )

        if os.getenv("SUMTREE_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("SUMTREE_LOG_LEVEL")
        if os.getenv("SUMTREE_LOG_FILE"):
            overrides["log_file"] = os.getenv("SUMTREE_LOG_FILE")

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
        tree_data = data.get("tree", {})
        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()

        return cls(
            hash_algorithm=data.get("hash_algorithm", "sha256"),
            tree=tree,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
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

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)

        for key in ("hash_algorithm", "log_level", "log_file"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        # Re-run normalization and validation on the overlaid values
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "tree": {
                "cache_subtrees": self.tree.cache_subtrees,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def setup_logging(config: RuntimeConfig | None = None, level: str | None = None) -> None:
    """Configure root logging from a runtime config."""
    config = config or get_default_config()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
