#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argparse actions that read their defaults from the environment.

Every option ``--foo-bar`` with destination ``foo_bar`` takes its default
from ``MD2BB_FOO_BAR`` when that variable is set. An option that was neither
given on the command line nor found in the environment is left as ``None``
so that configuration files can fill it in later.
"""

import argparse
import logging
import os
from typing import Any, Optional, Sequence

from md2bb.constants import ENV_PREFIX

_TRUE_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable name for an argparse destination."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


def parse_bool(value: str) -> bool:
    """Interpret an environment or config string as a boolean."""
    return value.strip().lower() in _TRUE_VALUES


def _dest_from_option_strings(option_strings: Sequence[str], dest: Optional[str]) -> Optional[str]:
    if dest:
        return dest
    for option in option_strings:
        if option.startswith("--"):
            return option[2:].replace("-", "_")
    return None


class EnvironmentAwareAction(argparse._StoreAction):
    """Store action whose default comes from ``MD2BB_<DEST>``."""

    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: Any):
        env_dest = _dest_from_option_strings(option_strings, dest)
        if env_dest:
            env_key = env_key_for(env_dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                converter = kwargs.get("type")
                try:
                    kwargs["default"] = converter(env_value) if converter is not None else env_value
                except (ValueError, TypeError) as e:
                    logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(option_strings, dest, **kwargs)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag whose default comes from ``MD2BB_<DEST>``.

    Without the flag or the variable the value is ``None`` rather than
    ``False``.
    """

    def __init__(self, option_strings: Sequence[str], dest: str, default: Optional[bool] = None, **kwargs: Any):
        env_dest = _dest_from_option_strings(option_strings, dest)
        if env_dest:
            env_value = os.environ.get(env_key_for(env_dest))
            if env_value is not None:
                default = parse_bool(env_value)

        super().__init__(option_strings, dest, default=default, **kwargs)
