"""
The render pipeline.

Raw update text and raw outdated text go in, one printable block comes out:
status lines, section grids, then the outdated table. The two phases are
independent, so a broken outdated document never hides the update log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import Config
from .logging_config import get_logger
from .outdated import OutdatedParseError, OutdatedReport, parse_outdated
from .render import colorize_header, layout_columns, tabulate
from .terminal import Terminal
from .update_log import UpdateLog, parse_update_log
from .version import colorize_version


OUTDATED_HEADER = "Outdated Formulae"


@dataclass
class RenderedReport:
    """
    Attributes:
        text: Everything to print on stdout
        diagnostics: Messages about skipped records and failed phases
        failed: Whether a phase could not be rendered
    """
    text: str
    diagnostics: list[str] = field(default_factory=list)
    failed: bool = False


def format_update(
    log: UpdateLog,
    outdated_names: Iterable[str],
    terminal_width: int,
    config: Config | None = None,
) -> str:
    """Status lines followed by every section header and its name grid."""
    config = config or Config()
    colors = config.colors
    layout = config.layout
    outdated_names = set(outdated_names)

    blocks = []
    for section in log.sections:
        headers = "\n".join(
            colorize_header(header, colors.header, colors.enabled) for header in section.headers
        )
        grid = layout_columns(
            section.names,
            outdated_names,
            terminal_width,
            gap=layout.gap,
            checkmark=layout.checkmark,
            checkmark_color=colors.checkmark,
            color=colors.enabled,
        )
        blocks.append(f"{headers}\n{grid}" if grid else headers)

    return "\n".join(part for part in ("\n".join(log.info), "\n".join(blocks)) if part)


def format_outdated(report: OutdatedReport, config: Config | None = None) -> str:
    """The ``name  installed  ->  candidate`` table with changes coloured."""
    config = config or Config()
    rows = [
        (
            record.name,
            record.latest_installed,
            config.layout.arrow,
            colorize_version(record.latest_installed, record.candidate_version, config.colors),
        )
        for record in report.records()
    ]
    return tabulate(rows, padding=config.layout.cell_padding)


def build_report(
    update_text: str | None,
    outdated_text: str | None,
    terminal: Terminal,
    config: Config | None = None,
) -> RenderedReport:
    """
    Render both phases into one block.

    Args:
        update_text: Output of ``brew update``, or None to skip that phase
        outdated_text: Output of ``brew outdated``, or None to skip that phase
        terminal: Source of the terminal width for the name grids
        config: Rendering configuration

    Returns:
        The rendered report. ``failed`` is set when the outdated document
        could not be parsed; the update phase is still rendered.
    """
    config = config or Config()
    logger = get_logger()
    result = RenderedReport(text="")

    outdated: OutdatedReport | None = None
    if outdated_text is not None:
        try:
            outdated = parse_outdated(
                outdated_text,
                use_json=config.outdated.json,
                split_cask_versions=config.outdated.split_cask_versions,
                cask_version_separator=config.outdated.cask_version_separator,
            )
        except OutdatedParseError as e:
            message = f"Failed to parse outdated formulae: {e}"
            logger.error(message)
            logger.debug(f"Offending document:\n{e.document}")
            result.diagnostics.append(message)
            result.failed = True

    if outdated is not None:
        result.diagnostics.extend(outdated.skipped)

    blocks = []
    if update_text is not None:
        log = parse_update_log(update_text, config.layout.section_marker)
        names = outdated.names() if outdated is not None else set()
        update_block = format_update(log, names, terminal.width(), config)
        if update_block:
            blocks.append(update_block)

    if outdated is None:
        if outdated_text is not None and not result.failed:
            logger.info("No outdated formulae")
    else:
        table = format_outdated(outdated, config)
        if table:
            header = colorize_header(
                f"{config.layout.section_marker} {OUTDATED_HEADER}",
                config.colors.header,
                config.colors.enabled,
            )
            blocks.append(f"{header}\n{table}")

    result.text = "\n\n".join(blocks)
    return result
