"""
Runtime Configuration

Central configuration for tree building, record input, logging and output.

The tree functions never read this configuration themselves; callers pass
the configured padding policy explicitly, so two builders given the same
records and policy always agree on the root.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


PADDING_POLICIES = ("duplicate_once", "next_power_of_two")
RECORDS_ENCODINGS = ("utf-8", "hex")
OUTPUT_FORMATS = ("human", "json")


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    padding_policy: str = "duplicate_once"
    records_encoding: str = "utf-8"

    def __post_init__(self):
        if self.padding_policy not in PADDING_POLICIES:
            raise ValueError(
                f"Unknown padding policy: {self.padding_policy!r} "
                f"(expected one of {', '.join(PADDING_POLICIES)})"
            )
        if self.records_encoding not in RECORDS_ENCODINGS:
            raise ValueError(
                f"Unknown records encoding: {self.records_encoding!r} "
                f"(expected one of {', '.join(RECORDS_ENCODINGS)})"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class OutputConfig:
    """Configuration for command output."""
    format: str = "human"

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {self.format!r}")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SPVTREE_PADDING_POLICY: duplicate_once | next_power_of_two
        - SPVTREE_RECORDS_ENCODING: utf-8 | hex
        - SPVTREE_LOG_LEVEL: Log level name
        - SPVTREE_LOG_FILE: Also log to this file
        - SPVTREE_OUTPUT_FORMAT: human | json
        """
        overrides: dict[str, Any] = {}

        if os.getenv("SPVTREE_PADDING_POLICY"):
            overrides.setdefault("tree", {})["padding_policy"] = os.getenv("SPVTREE_PADDING_POLICY")
        if os.getenv("SPVTREE_RECORDS_ENCODING"):
            overrides.setdefault("tree", {})["records_encoding"] = os.getenv("SPVTREE_RECORDS_ENCODING")

        if os.getenv("SPVTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("SPVTREE_LOG_LEVEL", "INFO").upper()
        if os.getenv("SPVTREE_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv("SPVTREE_LOG_FILE")

        if os.getenv("SPVTREE_OUTPUT_FORMAT"):
            overrides.setdefault("output", {})["format"] = os.getenv("SPVTREE_OUTPUT_FORMAT")

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
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix == ".json":
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            with open(path) as f:
                return cls.from_dict(json.load(f))
        return cls.from_yaml(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree") or {}
        logging_data = data.get("logging") or {}
        output_data = data.get("output") or {}

        return cls(
            tree=TreeConfig(**tree_data),
            logging=LoggingConfig(**logging_data),
            output=OutputConfig(**output_data),
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

        if "tree" in overrides:
            new_config.tree = TreeConfig(**{**self.tree.__dict__, **overrides["tree"]})

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        if "output" in overrides:
            new_config.output = OutputConfig(**{**self.output.__dict__, **overrides["output"]})

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "padding_policy": self.tree.padding_policy,
                "records_encoding": self.tree.records_encoding,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "output": {
                "format": self.output.format,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env-derived)."""
    global _default_config
    _default_config = config
