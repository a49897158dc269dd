"""Locating version strings in files and rewriting them in place."""

from __future__ import annotations

import os
import re
import stat
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .version import JUST_VERSION, DoverError, Version, find_version

_LINE_NUMBER = re.compile(r"[+-]?\d+", re.ASCII)


@dataclass(frozen=True)
class VersionMatch:
    """A version found in ``file`` on the zero-based line ``line``."""

    file: str
    line: int
    version: Version


def split_file_and_line_notation(path: str) -> tuple[str, str]:
    """Split ``file:lines`` into the file path and the line notation."""
    parts = path.split(":")
    if len(parts) == 1:
        return path, ""
    return parts[0], parts[1]


def parse_versioned_file_config(path: str) -> tuple[str, list[int]]:
    """Return the file path and the line numbers named in ``file:1,2``."""
    path, notation = split_file_and_line_notation(path)
    if not notation:
        return path, []
    lines = []
    for value in notation.split(","):
        if not _LINE_NUMBER.fullmatch(value):
            raise DoverError("invalid versioned file:line notation in configuration file")
        lines.append(int(value))
    return path, lines


def _read_lines(path: str) -> list[str]:
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read().split("\n")


def search_for_version_string(
    file: str, lines: Iterable[int], content: Sequence[str]
) -> list[VersionMatch]:
    """Find versions in ``content``, restricted to ``lines`` when any are given."""
    wanted = set(lines)
    matches = []
    for index, text in enumerate(content):
        if wanted and index not in wanted:
            continue
        version = find_version(text)
        if version is not None:
            matches.append(VersionMatch(file, index, version))
    return matches


def get_all_version_string_matches(files: Iterable[str]) -> list[VersionMatch]:
    """Collect version matches from every configured file entry."""
    matches = []
    for entry in files:
        path, lines = parse_versioned_file_config(entry)
        matches.extend(search_for_version_string(path, lines, _read_lines(path)))
    return matches


def versions_consistent(matches: Sequence[VersionMatch]) -> bool:
    """Tell whether every match holds the same version."""
    if not matches:
        raise DoverError("no version strings found in the versioned files")
    first = matches[0].version
    return all(match.version == first for match in matches)


def write_version_update(path: str, line_no: int, new_version: str) -> None:
    """Replace the version on line ``line_no`` of ``path`` with ``new_version``."""
    lines = _read_lines(path)
    updated = [
        JUST_VERSION.sub(lambda _match: new_version, text) if index == line_no else text
        for index, text in enumerate(lines)
    ]
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write("\n".join(updated))


def _digit_count(number: int) -> int:
    for width, limit in enumerate((10, 100, 1000, 10000), start=1):
        if number < limit:
            return width
    return 5


def max_column_widths(matches: Iterable[VersionMatch], spec: str) -> tuple[int, int, int]:
    """Return the widths of the file, line and formatted version columns."""
    file_width = line_width = version_width = 0
    for match in matches:
        file_width = max(file_width, len(match.file))
        line_width = max(line_width, _digit_count(match.line))
        version_width = max(version_width, len(match.version.format(spec)))
    return file_width, line_width, version_width


def file_exists(path: str) -> bool:
    """Tell whether ``path`` exists and is not a directory."""
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    return not stat.S_ISDIR(info.st_mode)