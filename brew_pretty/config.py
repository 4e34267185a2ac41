"""
Configuration file parsing and management.

Reads YAML configuration files and merges them from multiple sources
(explicit path → project → user → defaults), then applies environment
overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

import yaml

from .common import env_flag, vlog
from .render import COLOR_CODES


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".brew-pretty.yml",                                      # Project root (highest priority)
    ".brew-pretty.yaml",
    os.path.expanduser("~/.config/brew-pretty/config.yml"),  # User global
    os.path.expanduser("~/.config/brew-pretty/config.yaml"),
]


@dataclass(frozen=True)
class ColorConfig:
    """
    Colours used in the report.

    Attributes:
        major: Colour for changes in the first version part
        minor: Colour for changes in the second version part
        other: Colour for changes anywhere later
        header: Colour of the section marker
        checkmark: Colour of the outdated checkmark
        enabled: Emit ANSI escape sequences at all
    """
    major: str = "red"
    minor: str = "blue"
    other: str = "green"
    header: str = "blue"
    checkmark: str = "green"
    enabled: bool = True

    def __post_init__(self):
        """Validate colour names."""
        for name in ("major", "minor", "other", "header", "checkmark"):
            value = getattr(self, name)
            if value not in COLOR_CODES:
                raise ValueError(
                    f"Invalid {name} color: {value}. "
                    f"Must be one of: {', '.join(sorted(COLOR_CODES))}"
                )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ColorConfig:
        """Create ColorConfig from dictionary."""
        return ColorConfig(
            major=data.get("major", "red"),
            minor=data.get("minor", "blue"),
            other=data.get("other", "green"),
            header=data.get("header", "blue"),
            checkmark=data.get("checkmark", "green"),
            enabled=data.get("enabled", True),
        )


@dataclass(frozen=True)
class LayoutConfig:
    """
    Table and grid layout settings.

    Attributes:
        gap: Spaces between grid columns
        cell_padding: Spaces to the right of every table column
        arrow: Separator shown between installed and available versions
        checkmark: Glyph marking outdated names in update sections
        section_marker: Prefix identifying section header lines
        terminal_width: Fixed width; None queries the terminal
    """
    gap: int = 2
    cell_padding: int = 4
    arrow: str = "->"
    checkmark: str = "✔"
    section_marker: str = "==>"
    terminal_width: int | None = None

    def __post_init__(self):
        """Validate layout settings."""
        if self.gap < 1:
            raise ValueError(f"Invalid gap: {self.gap}. Must be at least 1")
        if self.cell_padding < 0:
            raise ValueError(f"Invalid cell_padding: {self.cell_padding}. Must not be negative")
        if not self.section_marker:
            raise ValueError("section_marker must not be empty")
        if self.terminal_width is not None and self.terminal_width < 0:
            raise ValueError(f"Invalid terminal_width: {self.terminal_width}. Must not be negative")

    @staticmethod
    def from_dict(data: dict[str, Any]) -> LayoutConfig:
        """Create LayoutConfig from dictionary."""
        return LayoutConfig(
            gap=data.get("gap", 2),
            cell_padding=data.get("cell_padding", 4),
            arrow=data.get("arrow", "->"),
            checkmark=data.get("checkmark", "✔"),
            section_marker=data.get("section_marker", "==>"),
            terminal_width=data.get("terminal_width"),
        )


@dataclass(frozen=True)
class OutdatedConfig:
    """
    How the outdated listing is requested and read.

    Attributes:
        json: Ask brew for the JSON document instead of text lines
        split_cask_versions: Split a cask's installed-version string into a list
        cask_version_separator: Separator between a cask's installed versions
    """
    json: bool = True
    split_cask_versions: bool = True
    cask_version_separator: str = ", "

    def __post_init__(self):
        if self.split_cask_versions and not self.cask_version_separator:
            raise ValueError("cask_version_separator must not be empty when split_cask_versions is set")

    @staticmethod
    def from_dict(data: dict[str, Any]) -> OutdatedConfig:
        """Create OutdatedConfig from dictionary."""
        return OutdatedConfig(
            json=data.get("json", True),
            split_cask_versions=data.get("split_cask_versions", True),
            cask_version_separator=data.get("cask_version_separator", ", "),
        )


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for brew-pretty.

    Attributes:
        version: Config schema version
        colors: Report colours
        layout: Table and grid layout
        outdated: Outdated listing options
        source: Path to the configuration file that was loaded
    """
    version: int = 1
    colors: ColorConfig = field(default_factory=ColorConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    outdated: OutdatedConfig = field(default_factory=OutdatedConfig)
    source: str = ""

    def __post_init__(self):
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        """Create Config from dictionary."""
        return Config(
            version=data.get("version", 1),
            colors=ColorConfig.from_dict(data.get("colors") or {}),
            layout=LayoutConfig.from_dict(data.get("layout") or {}),
            outdated=OutdatedConfig.from_dict(data.get("outdated") or {}),
            source=source,
        )


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else {}


def _merge_dicts(high: dict[str, Any], low: dict[str, Any]) -> dict[str, Any]:
    """Merge two raw config dictionaries, preferring ``high`` key by key."""
    merged = dict(low)
    for key, value in high.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dicts(value, merged[key])
        else:
            merged[key] = value
    return merged


def _load_config_data(file_path: str, verbose: bool = False) -> dict[str, Any] | None:
    """
    Load the raw dictionary of one file, provided it forms a valid Config.

    Returns:
        Parsed configuration dictionary, or None if the file is missing,
        unreadable or invalid
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    data = _load_yaml(file_path)
    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        Config.from_dict(data, source=file_path)
    except (ValueError, TypeError, AttributeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None
    return data


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to configuration file
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    data = _load_config_data(file_path, verbose)
    if data is None:
        return None
    return Config.from_dict(data, source=file_path)


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .brew-pretty.yml
    3. User ~/.config/brew-pretty/config.yml
    4. Default configuration

    Each file must be valid on its own; invalid files in the standard
    locations are skipped. Valid files are merged key by key, and
    environment overrides are applied last.

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Merged Config object (never None, returns defaults if no config found)

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded,
            or the merged configuration is invalid
    """
    sources: list[tuple[str, dict[str, Any]]] = []

    if custom_path:
        data = _load_config_data(custom_path, verbose)
        if data is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        sources.append((custom_path, data))
        vlog(f"Using custom config: {custom_path}", verbose)

    for location in CONFIG_LOCATIONS:
        data = _load_config_data(location, verbose)
        if data is not None:
            sources.append((location, data))
            vlog(f"Found config at: {location}", verbose)

    if not sources:
        vlog("No config files found, using defaults", verbose)
        config = Config()
    else:
        merged: dict[str, Any] = {}
        for _, data in reversed(sources):
            merged = _merge_dicts(data, merged)
        try:
            config = Config.from_dict(merged, source=sources[0][0])
        except (ValueError, TypeError, AttributeError) as e:
            raise ValueError(f"Merged configuration is invalid: {e}") from e
        vlog(f"Merged {len(sources)} config files", verbose)

    return apply_env_overrides(config, environ)


def apply_env_overrides(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """
    Apply environment variable overrides.

    NO_COLOR (any non-empty value) or BREW_PRETTY_COLOR=0 disable colour,
    BREW_PRETTY_WIDTH fixes the terminal width.
    """
    env = os.environ if environ is None else environ

    colors = config.colors
    if env.get("NO_COLOR") or not env_flag("BREW_PRETTY_COLOR", True, env):
        colors = replace(colors, enabled=False)

    layout = config.layout
    width = env.get("BREW_PRETTY_WIDTH", "").strip()
    if width:
        if not width.isdigit():
            raise ValueError(f"Invalid BREW_PRETTY_WIDTH: {width}. Must be a non-negative integer")
        layout = replace(layout, terminal_width=int(width))

    return replace(config, colors=colors, layout=layout)


def validate_config(config: Config) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Args:
        config: Config object to validate

    Returns:
        List of validation warning messages (empty if valid)
    """
    warnings = []

    tiers = (config.colors.major, config.colors.minor, config.colors.other)
    if len(set(tiers)) != len(tiers):
        warnings.append("major, minor and other colors are not distinct")

    if len(config.layout.checkmark) != 1:
        warnings.append(
            f"checkmark '{config.layout.checkmark}' is not a single character; "
            "outdated names in update sections may be misaligned"
        )

    if not config.layout.arrow:
        warnings.append("arrow is empty")

    return warnings
