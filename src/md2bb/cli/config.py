#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the md2bb CLI.

This module finds configuration files, loads them from TOML, YAML or JSON,
normalizes their keys to option names, and layers them under command-line
and environment values.
"""

import argparse
import json
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from md2bb.cli.actions import parse_bool
from md2bb.options import MarkdownParserOptions, TranslatorOptions

CONFIG_FILENAMES = [".md2bb.toml", ".md2bb.yaml", ".md2bb.yml", ".md2bb.json", "pyproject.toml"]

DEDICATED_CONFIG_FILENAMES = CONFIG_FILENAMES[:-1]

CONFIG_ENV_VAR = "MD2BB_CONFIG"

# Settings that are not option fields but may still be configured
_STRING_SETTINGS = {"input", "output", "log_level", "log_file"}
_BOOLEAN_SETTINGS = {"trace"}


def _option_aliases() -> Dict[str, str]:
    aliases = {}
    for f in fields(MarkdownParserOptions):
        aliases[f.name] = f.name
        cli_name = f.metadata.get("cli_name")
        if cli_name:
            aliases[cli_name.replace("-", "_")] = f.name
    for f in fields(TranslatorOptions):
        aliases[f.name] = f.name
    for name in _STRING_SETTINGS | _BOOLEAN_SETTINGS:
        aliases[name] = name
    return aliases


def _boolean_settings() -> set[str]:
    names = {f.name for f in fields(MarkdownParserOptions)} | {"encoding_warnings"}
    return names | _BOOLEAN_SETTINGS


def _load_pyproject_md2bb_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.md2bb] section from a pyproject.toml file.

    Returns an empty dict when the section is absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("md2bb")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.md2bb] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory the
    dedicated files (``.md2bb.toml``, ``.md2bb.yaml``, ``.md2bb.yml``,
    ``.md2bb.json``) are checked first, then ``pyproject.toml`` if it has a
    ``[tool.md2bb]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_md2bb_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # Unreadable pyproject.toml files are skipped during discovery
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches the working directory and its parents first, then the user's
    home directory for the dedicated config filenames.
    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name: ``pyproject.toml`` yields its
    ``[tool.md2bb]`` section, otherwise the extension decides.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Raw configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".md2bb.toml")
    >>> config.get("dialect")
    'xenforo'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_md2bb_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def normalize_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Map configuration keys to option names and check value types.

    Keys may use ``-`` or ``_`` and may be either the option field name
    (``parse_tables``) or its command-line name (``tables``).

    Raises
    ------
    argparse.ArgumentTypeError
        On unknown keys or values of the wrong type

    Examples
    --------
    >>> normalize_config({"smart-punctuation": True, "dialect": "proboards"})
    {'smart_punctuation': True, 'dialect': 'proboards'}

    """
    aliases = _option_aliases()
    booleans = _boolean_settings()
    normalized: Dict[str, Any] = {}

    for key, value in config.items():
        name = aliases.get(str(key).replace("-", "_"))
        if name is None:
            raise argparse.ArgumentTypeError(f"Unknown configuration option: {key}")

        if name in booleans:
            if isinstance(value, str):
                value = parse_bool(value)
            elif not isinstance(value, bool):
                raise argparse.ArgumentTypeError(
                    f"Configuration option {key} must be a boolean, got {type(value).__name__}"
                )
        elif not isinstance(value, str):
            raise argparse.ArgumentTypeError(f"Configuration option {key} must be a string, got {type(value).__name__}")

        normalized[name] = value

    return normalized


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MD2BB_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Normalized configuration (empty if no config file was found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return normalize_config(load_config_file(explicit_path))

    if env_var_path:
        return normalize_config(load_config_file(env_var_path))

    discovered_path = discover_config_file()
    if discovered_path:
        return normalize_config(load_config_file(discovered_path))

    return {}


def apply_config_defaults(namespace: argparse.Namespace, config: Mapping[str, Any]) -> argparse.Namespace:
    """Fill attributes left unset (``None``) by the command line and environment.

    Command-line flags and ``MD2BB_*`` variables have already been applied by
    the argument parser, so config values only replace ``None``.
    """
    for name, value in config.items():
        if getattr(namespace, name, None) is None:
            setattr(namespace, name, value)
    return namespace
