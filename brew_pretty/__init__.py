"""
brew-pretty - Colourized Homebrew update and outdated reports.

Core Modules:
- Versions: tokenizing, diffing and colouring version strings
- Rendering: aligned tables and column-packed name grids
- Parsing: brew update logs and brew outdated listings
- Pipeline: the report assembled from both phases
"""

__version__ = "1.0.0"
__author__ = "brew-pretty Contributors"

VERSION = __version__

# Versions
from .version import (
    ColorTier,
    Token,
    TokenKind,
    VersionRangeError,
    colorize,
    colorize_version,
    diff_position,
    join_tokens,
    tokenize,
)

# Rendering
from .render import (
    bold,
    colorize_header,
    layout_columns,
    paint,
    strip_control_for_width,
    tabulate,
    visible_width,
)
from .terminal import FixedTerminal, Terminal, TerminalInfo, terminal_for

# Parsing
from .update_log import UpdateLog, UpdateSection, info_lines, parse_sections, parse_update_log
from .outdated import (
    FormulaRecord,
    OutdatedParseError,
    OutdatedReport,
    parse_outdated,
    parse_outdated_json,
    parse_outdated_text,
)

# Pipeline
from .report import RenderedReport, build_report, format_outdated, format_update
from .brew import BrewCommandError, run_outdated, run_update

# Configuration and logging
from .config import ColorConfig, Config, LayoutConfig, OutdatedConfig, load_config, validate_config
from .logging_config import get_logger, setup_logging

__all__ = [
    # Version
    "__version__",
    "VERSION",
    # Versions
    "ColorTier",
    "Token",
    "TokenKind",
    "VersionRangeError",
    "colorize",
    "colorize_version",
    "diff_position",
    "join_tokens",
    "tokenize",
    # Rendering
    "bold",
    "colorize_header",
    "layout_columns",
    "paint",
    "strip_control_for_width",
    "tabulate",
    "visible_width",
    "FixedTerminal",
    "Terminal",
    "TerminalInfo",
    "terminal_for",
    # Parsing
    "UpdateLog",
    "UpdateSection",
    "info_lines",
    "parse_sections",
    "parse_update_log",
    "FormulaRecord",
    "OutdatedParseError",
    "OutdatedReport",
    "parse_outdated",
    "parse_outdated_json",
    "parse_outdated_text",
    # Pipeline
    "RenderedReport",
    "build_report",
    "format_outdated",
    "format_update",
    "BrewCommandError",
    "run_outdated",
    "run_update",
    # Configuration and logging
    "ColorConfig",
    "Config",
    "LayoutConfig",
    "OutdatedConfig",
    "load_config",
    "validate_config",
    "get_logger",
    "setup_logging",
]
