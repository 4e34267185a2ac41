"""
Thin wrapper around the ``brew`` executable.

Only these functions touch the outside world; everything they return is
plain text handed to the parsers.
"""

from __future__ import annotations

import os
import subprocess

from .logging_config import get_logger


BREW = os.environ.get("BREW_PRETTY_BREW", "brew")
UPDATE_TIMEOUT_SECONDS = 300
OUTDATED_TIMEOUT_SECONDS = 120


class BrewCommandError(Exception):
    """
    A brew invocation could not produce output.

    Attributes:
        command: The command line that was run
        message: Human-readable error message
    """
    def __init__(self, command: tuple[str, ...], message: str):
        self.command = command
        self.message = message
        super().__init__(f"{' '.join(command)}: {message}")


def decode_output(value: bytes) -> str:
    """Decode process output as UTF-8, degrading to "" if it is not valid text."""
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        get_logger().warning(f"Discarding undecodable brew output: {e}")
        return ""


def run_brew(*args: str, timeout: int = OUTDATED_TIMEOUT_SECONDS) -> str:
    """
    Run brew and return its stdout.

    Args:
        *args: Arguments after the brew executable
        timeout: Seconds to wait before giving up

    Returns:
        Decoded stdout

    Raises:
        BrewCommandError: If brew is missing, times out or exits non-zero
    """
    command = (BREW, *args)
    get_logger().debug(f"Running: {' '.join(command)}")
    try:
        proc = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
            env={**os.environ, "HOMEBREW_NO_COLOR": "1", "HOMEBREW_NO_EMOJI": "1"},
        )
    except FileNotFoundError:
        raise BrewCommandError(command, "brew executable not found") from None
    except subprocess.TimeoutExpired:
        raise BrewCommandError(command, f"timed out after {timeout}s") from None

    stdout = decode_output(proc.stdout)
    if proc.returncode != 0:
        stderr = decode_output(proc.stderr).strip()
        if not stdout.strip():
            raise BrewCommandError(command, stderr or f"exited with status {proc.returncode}")
        get_logger().warning(f"{' '.join(command)} exited with status {proc.returncode}: {stderr}")

    return stdout


def run_update(timeout: int = UPDATE_TIMEOUT_SECONDS) -> str:
    """Output of ``brew update``."""
    return run_brew("update", timeout=timeout)


def run_outdated(json: bool = True, timeout: int = OUTDATED_TIMEOUT_SECONDS) -> str:
    """Output of ``brew outdated``, as the JSON document or verbose text lines."""
    if json:
        return run_brew("outdated", "--json=v2", timeout=timeout)
    return run_brew("outdated", "--verbose", timeout=timeout)
