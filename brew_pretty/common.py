"""
Common utilities shared across brew_pretty modules.
"""

from __future__ import annotations

import os
from typing import Mapping


def env_flag(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """
    Read a boolean environment flag ("1"/"0", "true"/"false", "yes"/"no").

    Args:
        name: Variable name
        default: Value when the variable is unset or unrecognised
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Parsed flag value
    """
    env = os.environ if environ is None else environ
    value = env.get(name, "").strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log a message only in verbose mode (or when BREW_PRETTY_DEBUG=1).

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or env_flag("BREW_PRETTY_DEBUG", False):
        from .logging_config import get_logger
        get_logger().debug(msg)
