"""
CLI Configuration

Locates and loads the configuration file for the spvtree CLI.
Environment variables (SPVTREE_* prefix) override file settings.
"""

from __future__ import annotations

from pathlib import Path

from spvtree.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Config files checked, in order, when --config is not given."""
    return [
        Path.cwd() / "spvtree.yaml",
        Path.cwd() / "spvtree.yml",
        Path.cwd() / "spvtree.json",
        Path.home() / ".config" / "spvtree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a .yaml/.yml/.json config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file (YAML)."""
    return """# spvtree configuration
tree:
  # duplicate_once: pad an odd record count once, reject non-powers of two
  # next_power_of_two: keep duplicating the last record up to a power of two
  padding_policy: duplicate_once
  # utf-8: one record per line, raw line bytes; hex: one hex record per line
  records_encoding: utf-8

logging:
  level: INFO
  file: null

output:
  # human or json
  format: human
"""
