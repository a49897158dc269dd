"""Version strings: parsing, formatting and bumping."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, replace
from functools import lru_cache

RELEASES = ("dev", "alpha", "beta", "rc")
SHORT = {"dev": "d", "alpha": "a", "beta": "b", "rc": "rc", "d": "d", "a": "a", "b": "b"}
LONG = {
    "dev": "dev",
    "alpha": "alpha",
    "beta": "beta",
    "rc": "rc",
    "d": "dev",
    "a": "alpha",
    "b": "beta",
}

DEFAULT_FORMAT = "000-A.0"

_VERSION_BODY = (
    r"(?P<major>\d+)(\.(?P<minor>\d+))(\.(?P<patch>\d+))?"
    r"([\.\-\+](?P<release>[a-z]+)([\.-]?(?P<build>\d+))?)?"
)
JUST_VERSION = re.compile(_VERSION_BODY, re.ASCII)
VERSION_LINE = re.compile(
    r"(version|VERSION|Version)[^ :=]* ?[:=]? ? [\"']?" + _VERSION_BODY + r"[\"']?",
    re.ASCII,
)
FORMAT_PATTERN = re.compile(r"(000)([^a-zA-Z\d])?([aA])?([^a-zA-Z\d])?(0)?", re.ASCII)


class DoverError(Exception):
    """Base error for version handling."""


class ReleaseOrderError(DoverError):
    """A pre-release was requested that precedes the current one."""


class FormatError(DoverError):
    """A version format string could not be parsed."""


@dataclass(frozen=True)
class Formatter:
    """Renders a version according to a parsed format string."""

    version_format: str = "000"
    release_separator: str = ""
    release_format: str = ""
    build_separator: str = ""
    build_format: str = ""

    def format(self, version: Version) -> str:
        numbers = (version.major, version.minor, version.patch)
        output = ".".join(numbers[: len(self.version_format)])
        if version.release:
            output += self.release_separator
            if self.release_format == "a":
                output += SHORT.get(version.release, "")
            elif self.release_format == "A":
                output += LONG.get(version.release, "")
            if self.build_format == "0":
                output += self.build_separator + version.build
        return output


@lru_cache(maxsize=None)
def parse_format(spec: str) -> Formatter:
    """Parse a format string such as ``000-A.0`` into a Formatter."""
    match = FORMAT_PATTERN.fullmatch(spec)
    if match is None:
        raise FormatError(f"Invalid version format: {spec}")
    return Formatter(*(group or "" for group in match.groups()))


def next_release(current: str) -> str:
    """Return the pre-release after ``current``; empty after the last one."""
    index = RELEASES.index(current) + 1 if current in RELEASES else 0
    return RELEASES[index] if index < len(RELEASES) else ""


def _release_index(release: str) -> int:
    return RELEASES.index(release) if release in RELEASES else -1


def validate_release_order(current: str, requested: str) -> None:
    """Raise ReleaseOrderError if ``requested`` precedes ``current``."""
    if _release_index(requested) < _release_index(current):
        raise ReleaseOrderError(
            f"Invalid release order requested. `{requested}` comes before "
            f"the current release `{current}`."
        )


@dataclass(frozen=True, eq=False)
class Version:
    """A version number; equality compares the canonical rendering."""

    major: str = "0"
    minor: str = "0"
    patch: str = "0"
    release: str = ""
    build: str = "0"

    def format(self, spec: str) -> str:
        return parse_format(spec).format(self)

    def __str__(self) -> str:
        return self.format(DEFAULT_FORMAT)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def bump_major(self) -> Version:
        return Version(str(int(self.major) + 1), "0", "0", "", "0")

    def bump_minor(self) -> Version:
        return Version(self.major, str(int(self.minor) + 1), "0", "", "0")

    def bump_patch(self) -> Version:
        return Version(self.major, self.minor, str(int(self.patch) + 1), "", "0")

    def bump_build(self) -> Version:
        return replace(self, build=str(int(self.build) + 1))

    def bump_release(self) -> Version:
        return replace(self, release=next_release(self.release), build="0")

    def bump_release_to_prod(self) -> Version:
        return replace(self, release="", build="0")

    def set_pre_release(self, release: str) -> Version:
        validate_release_order(self.release, release)
        if self.release == release:
            return self
        return replace(self, release=release, build="0")

    def bump(self, part: str, pre_release: str) -> Version:
        """Return the version after bumping ``part`` and ``pre_release``."""
        new = self
        if part == "major":
            new = new.bump_major()
        elif part == "minor":
            new = new.bump_minor()
        elif part == "patch":
            new = new.bump_patch()

        if pre_release == "pre-release":
            new = new.bump_release()
        elif pre_release in RELEASES:
            new = new.set_pre_release(pre_release)
        elif pre_release == "release":
            new = new.bump_release_to_prod()

        if new.release and (part == "build" or self.release == pre_release):
            new = new.bump_build()
        return new


def _zero_if_empty(value: str | None) -> str:
    return value or "0"


def new_version(parts: Sequence[str]) -> Version:
    """Build a Version from major, minor, patch, release and build strings."""
    major, minor, patch, release, build = parts
    return Version(
        _zero_if_empty(major),
        _zero_if_empty(minor),
        _zero_if_empty(patch),
        release or "",
        _zero_if_empty(build),
    )


def find_version(line: str) -> Version | None:
    """Return the version declared on ``line``, or None."""
    match = VERSION_LINE.search(line)
    if match is None:
        return None
    return new_version(
        [match.group(name) for name in ("major", "minor", "patch", "release", "build")]
    )