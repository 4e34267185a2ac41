"""
Parsing of ``brew outdated`` output into formula records.

Two shapes are accepted: verbose text lines
(``rust (1.38.0, 1.39.0) < 1.40.0``) and the JSON document of
``brew outdated --json=v2``. Both produce the same FormulaRecord values.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from itertools import chain
from typing import Any, Iterator

from .logging_config import get_logger


LINE_RE = re.compile(r"(?P<name>.+)\s\((?P<installed>.+)\)\s<\s(?P<candidate>.+)")
LINE_VERSION_SEPARATOR = ", "


class OutdatedParseError(ValueError):
    """
    The outdated document is not the expected envelope.

    Attributes:
        document: The offending document, for diagnosis
    """
    def __init__(self, message: str, document: str):
        super().__init__(message)
        self.document = document


@dataclass(frozen=True)
class FormulaRecord:
    """
    One outdated formula or cask.

    Attributes:
        name: Formula or cask name
        installed_versions: Installed versions, oldest first
        candidate_version: Version available for upgrade
    """
    name: str
    installed_versions: tuple[str, ...]
    candidate_version: str

    @property
    def latest_installed(self) -> str:
        return self.installed_versions[-1]


@dataclass
class OutdatedReport:
    """
    Records to render plus diagnostics for the entries that were skipped.

    Skipped entries are still outdated, so their names stay in
    ``skipped_names`` and count towards names().
    """
    formulae: list[FormulaRecord] = field(default_factory=list)
    casks: list[FormulaRecord] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    skipped_names: list[str] = field(default_factory=list)

    def records(self) -> Iterator[FormulaRecord]:
        return chain(self.formulae, self.casks)

    def names(self) -> set[str]:
        return {record.name for record in self.records()} | set(self.skipped_names)


def _make_record(
    name: str,
    installed: list[str],
    candidate: str,
    report: OutdatedReport,
) -> FormulaRecord | None:
    if not installed:
        message = f"There are no installed versions: {name}"
        get_logger().warning(message)
        report.skipped.append(message)
        report.skipped_names.append(name)
        return None
    return FormulaRecord(name, tuple(installed), candidate)


def parse_line(line: str) -> tuple[str, list[str], str] | None:
    """Split a ``name (v1, v2) < v3`` line, or None if it has another shape."""
    match = LINE_RE.search(line)
    if match is None:
        return None
    return (
        match["name"],
        match["installed"].split(LINE_VERSION_SEPARATOR),
        match["candidate"],
    )


def parse_outdated_text(text: str) -> OutdatedReport | None:
    """
    Parse verbose ``brew outdated`` lines.

    Lines of any other shape are ignored.

    Returns:
        The report, or None when no line describes an outdated formula
    """
    report = OutdatedReport()
    for line in text.splitlines():
        fields = parse_line(line)
        if fields is None:
            continue
        record = _make_record(*fields, report)
        if record is not None:
            report.formulae.append(record)

    if not report.formulae and not report.skipped:
        return None
    return report


def _installed_versions(
    value: Any,
    separator: str | None,
    document: str,
) -> list[str]:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    if isinstance(value, str):
        if not value:
            return []
        return value.split(separator) if separator else [value]
    raise OutdatedParseError(f"installed_versions must be a list or a string, got {value!r}", document)


def _entries(data: dict[str, Any], key: str, document: str) -> list[dict[str, Any]]:
    entries = data.get(key)
    if not isinstance(entries, list):
        raise OutdatedParseError(f"'{key}' must be a list", document)

    for entry in entries:
        if not isinstance(entry, dict):
            raise OutdatedParseError(f"'{key}' entries must be objects, got {entry!r}", document)
        for required in ("name", "installed_versions", "current_version"):
            if required not in entry:
                raise OutdatedParseError(f"'{key}' entry is missing '{required}': {entry!r}", document)
        if not isinstance(entry["name"], str) or not isinstance(entry["current_version"], str):
            raise OutdatedParseError(f"'{key}' entry has a non-string name or version: {entry!r}", document)
    return entries


def parse_outdated_json(
    document: str,
    split_cask_versions: bool = True,
    cask_version_separator: str = LINE_VERSION_SEPARATOR,
) -> OutdatedReport | None:
    """
    Parse the ``brew outdated --json=v2`` document.

    Formula entries carry their installed versions as a list. Cask entries
    carry them as one string joined with ``cask_version_separator``, which
    is split unless ``split_cask_versions`` is False.

    Args:
        document: Raw JSON text
        split_cask_versions: Split the cask installed-version string
        cask_version_separator: Separator between cask installed versions

    Returns:
        The report, or None when both lists are empty

    Raises:
        OutdatedParseError: If the document is not valid JSON with
            ``formulae`` and ``casks`` lists of well-formed entries
    """
    try:
        data = json.loads(document)
    except json.JSONDecodeError as e:
        raise OutdatedParseError(f"Invalid JSON: {e}", document) from e

    if not isinstance(data, dict):
        raise OutdatedParseError("Expected a JSON object with 'formulae' and 'casks'", document)

    formulae = _entries(data, "formulae", document)
    casks = _entries(data, "casks", document)
    if not formulae and not casks:
        return None

    separator = cask_version_separator if split_cask_versions else None
    report = OutdatedReport()
    for entry in formulae:
        installed = _installed_versions(entry["installed_versions"], LINE_VERSION_SEPARATOR, document)
        record = _make_record(entry["name"], installed, entry["current_version"], report)
        if record is not None:
            report.formulae.append(record)

    for entry in casks:
        installed = _installed_versions(entry["installed_versions"], separator, document)
        record = _make_record(entry["name"], installed, entry["current_version"], report)
        if record is not None:
            report.casks.append(record)

    return report


def parse_outdated(
    text: str,
    use_json: bool = True,
    split_cask_versions: bool = True,
    cask_version_separator: str = LINE_VERSION_SEPARATOR,
) -> OutdatedReport | None:
    """Parse either shape of the outdated listing."""
    if use_json:
        return parse_outdated_json(text, split_cask_versions, cask_version_separator)
    return parse_outdated_text(text)
