"""Command line interface: argument parsing, reports and updates."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from .config import DOVER_CONFIG_FILE, DOVER_DEFAULT_CONFIG, ConfigValues, config_values
from .search import (
    VersionMatch,
    file_exists,
    get_all_version_string_matches,
    max_column_widths,
    versions_consistent,
    write_version_update,
)
from .version import DoverError, Version

VERSION = "0.3.0"

_YELLOW, _RED, _BLUE, _BOLD, _UNDERLINE = 33, 31, 34, 1, 4
_HI_WHITE, _HI_MAGENTA, _HI_GREEN = 97, 95, 92

_TOOL = (_YELLOW,)
_HEADER = (_RED, _UNDERLINE)
_FLAGS_STYLE = (_HI_WHITE,)
_DESC = (_BLUE,)


class UsageError(DoverError):
    """The command line arguments are invalid."""


class InconsistentVersionsError(DoverError):
    """The versioned files do not all hold the same version."""


def _paint(text: str, *codes: int, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"\x1b[{';'.join(map(str, codes))}m{text}\x1b[0m"


@dataclass(frozen=True)
class ExecutionArgs:
    """What the command line asks dover to do."""

    initialize: bool = False
    echo: bool = False
    increment: bool = False
    format: str = ""
    verbose: bool = False
    part: str = ""
    pre_release: str = ""


@dataclass
class Usage:
    """Builds the help and usage texts."""

    name: str
    description: str
    usage: dict[str, list[str]] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)

    def add_usage(self, cmd: str, args: Sequence[str]) -> None:
        self.usage[cmd] = list(args)

    def add_option(self, flag: str, text: str) -> None:
        self.options[flag] = text

    def _prefix(self, first: bool, colorize: bool) -> str:
        prefix = self.name if first else " " * len(self.name)
        return _paint(f"  {prefix}", *_TOOL, enabled=colorize)

    def _usage_section(self, colorize: bool) -> str:
        parts = [_paint("Usage:\n", *_HEADER, enabled=colorize)]
        for cmd, uses in self.usage.items():
            for index, use in enumerate(uses or [""]):
                parts.append(self._prefix(index == 0, colorize))
                parts.append(f" {cmd}{use}\n")
        for flag in ("--help", "--version"):
            parts.append(_paint(f"  {self.name}", *_TOOL, enabled=colorize))
            parts.append(f" {flag}\n")
        return "".join(parts)

    def _options_section(self, colorize: bool) -> str:
        parts = ["\n", _paint("Options:\n", *_HEADER, enabled=colorize)]
        width = max((len(key) for key in self.options), default=0)
        for flag, text in self.options.items():
            parts.append(_paint(f"  {flag:<{width}}", *_FLAGS_STYLE, enabled=colorize))
            parts.append(_paint(f"  {text}\n", *_DESC, enabled=colorize))
        return "".join(parts)

    def help_text(self, colorize: bool) -> str:
        header = _paint(f"\n{self.name}", *_TOOL, enabled=colorize)
        return (
            f"{header} {self.description}\n\n"
            + self._usage_section(colorize)
            + self._options_section(colorize)
        )

    def usage_text(self, colorize: bool) -> str:
        header = _paint("\nInvalid arguments provided...\n\n", *_TOOL, enabled=colorize)
        return header + self._usage_section(colorize)


def new_usage_builder() -> Usage:
    """Return the usage description of the dover command."""
    usage = Usage("dover", "(do version) reports and updates your version number.")
    usage.add_usage(
        "",
        [
            "[--increment | --echo] [--format=<fmt>] [--verbose]",
            "[--major | --minor | --patch | --build] ",
            "[--pre-release | --dev | --alpha | --beta | --rc | --release]",
        ],
    )
    usage.add_usage("init", [])

    usage.add_option("-i --increment", "Apply the increment.")
    usage.add_option("-e --echo", "Display future version.")
    usage.add_option("-f --format=<fmt>", "Apply format string: 000[-.+][(aA)[-.]0]")
    usage.add_option("-M --major", "Update major version segment.")
    usage.add_option("-m --minor", "Update minor version segment.")
    usage.add_option("-p --patch", "Update patch version segment.")
    usage.add_option("-P --pre-release", "Update to next pre-release.")
    usage.add_option("-d --dev", "Update dev version segment or bump dev build.")
    usage.add_option("-a --alpha", "Update alpha pre-release segment or bump alpha build.")
    usage.add_option("-b --beta", "Update beta pre-release segment or bump beta build.")
    usage.add_option("-r --rc", "Update release candidate segment or bump rc build.")
    usage.add_option("-B --build", "Update the pre-release build number.")
    usage.add_option("-R --release", "Clear pre-release version.")
    usage.add_option("-v --verbose", "Display details when incrementing.")
    usage.add_option("-h --help", "Display this help message.")
    usage.add_option("--version", "Display dover version.")
    return usage


_SHORT_FLAGS = {
    "i": "--increment",
    "e": "--echo",
    "M": "--major",
    "m": "--minor",
    "p": "--patch",
    "P": "--pre-release",
    "d": "--dev",
    "a": "--alpha",
    "b": "--beta",
    "r": "--rc",
    "B": "--build",
    "R": "--release",
    "v": "--verbose",
    "h": "--help",
}
_LONG_FLAGS = (*_SHORT_FLAGS.values(), "--version")
_FORMAT = "--format"
_PART_FLAGS = ("major", "minor", "patch", "build")
_RELEASE_FLAGS = ("pre-release", "dev", "alpha", "beta", "rc", "release")
_EXCLUSIVE = (
    ("--increment", "--echo"),
    tuple(f"--{flag}" for flag in _PART_FLAGS),
    tuple(f"--{flag}" for flag in _RELEASE_FLAGS),
)


def _resolve_long(name: str) -> str:
    candidates = [option for option in (*_LONG_FLAGS, _FORMAT) if option.startswith(name)]
    if name in candidates:
        return name
    if len(candidates) == 1:
        return candidates[0]
    raise UsageError(f"unknown or ambiguous option: {name}")


def parse_args(argv: Sequence[str]) -> dict[str, bool | str | None]:
    """Parse the command line into a mapping of option names to values."""
    opts: dict[str, bool | str | None] = {"init": False, _FORMAT: None}
    opts.update({name: False for name in _LONG_FLAGS})
    seen: set[str] = set()
    positionals: list[str] = []
    tokens = iter(argv)

    def mark(name: str) -> None:
        if name in seen:
            raise UsageError(f"option {name} given more than once")
        seen.add(name)

    def set_format(value: str | None) -> None:
        if value is None:
            raise UsageError(f"{_FORMAT} requires an argument")
        mark(_FORMAT)
        opts[_FORMAT] = value

    def set_flag(name: str) -> None:
        mark(name)
        opts[name] = True

    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break
        if token.startswith("--"):
            name, has_value, value = token.partition("=")
            name = _resolve_long(name)
            if name == _FORMAT:
                set_format(value if has_value else next(tokens, None))
            elif has_value:
                raise UsageError(f"{name} must not have an argument")
            else:
                set_flag(name)
        elif token.startswith("-") and token != "-":
            rest = token[1:]
            while rest:
                char, rest = rest[0], rest[1:]
                if char == "f":
                    set_format(rest if rest else next(tokens, None))
                    break
                long_name = _SHORT_FLAGS.get(char)
                if long_name is None:
                    raise UsageError(f"unknown option: -{char}")
                set_flag(long_name)
        else:
            positionals.append(token)

    if opts["--help"] or opts["--version"]:
        return opts

    if positionals == ["init"]:
        if seen:
            raise UsageError("init takes no options")
        opts["init"] = True
    elif positionals:
        raise UsageError(f"unexpected argument: {positionals[0]}")

    for group in _EXCLUSIVE:
        if sum(bool(opts[name]) for name in group) > 1:
            raise UsageError(f"only one of {', '.join(group)} may be given")
    return opts


def filter_flags(args: Mapping[str, object], flags: Sequence[str]) -> str:
    """Return the single flag among ``flags`` set in ``args``, or an empty string."""
    active = [
        key.lstrip("-")
        for key, value in args.items()
        if value is True and key.lstrip("-") in flags
    ]
    if len(active) > 1:
        raise DoverError("Active flags can only be 1 or 0.")
    return active[0] if active else ""


def _compile_arguments(opts: Mapping[str, object]) -> ExecutionArgs:
    return ExecutionArgs(
        initialize=bool(opts.get("init")),
        echo=bool(opts.get("--echo")),
        increment=bool(opts.get("--increment")),
        format=str(opts.get(_FORMAT) or ""),
        verbose=bool(opts.get("--verbose")),
        part=filter_flags(opts, _PART_FLAGS),
        pre_release=filter_flags(opts, _RELEASE_FLAGS),
    )


def select_format(args: ExecutionArgs, cfg: ConfigValues) -> str:
    """Prefer the format given on the command line over the configured one."""
    return args.format or cfg.format


def _print_current_versions(matches: Sequence[VersionMatch], spec: str) -> None:
    file_w, line_w, vers_w = max_column_widths(matches, spec)
    for match in matches:
        print(
            f"{_paint(match.file.ljust(file_w), _YELLOW)}: "
            f"{_paint(str(match.line).zfill(line_w), _BLUE)}  "
            f"{_paint(match.version.format(spec).ljust(vers_w), _BOLD, _HI_WHITE)}"
        )


def _print_version_changes(
    matches: Sequence[VersionMatch], part: str, release: str, spec: str, updated: bool
) -> None:
    file_w, line_w, vers_w = max_column_widths(matches, spec)
    update = "updated " if updated else ""
    for match in matches:
        new = match.version.bump(part, release)
        print(
            f"{_paint(match.file.ljust(file_w), _YELLOW)}: "
            f"{_paint(str(match.line).zfill(line_w), _BLUE)} {update}"
            f"{_paint(match.version.format(spec).ljust(vers_w), _BOLD, _HI_WHITE)}"
            f" -> {_paint(new.format(spec), _HI_WHITE)}"
        )


def _check_consistency(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    if versions_consistent(matches):
        return
    if args.increment:
        print(_paint("No files have been changed!\n", _HI_MAGENTA), end="")
    print(_paint("\nVersions do not match across all files.\n", _HI_MAGENTA), end="")
    _print_current_versions(matches, args.format)
    raise InconsistentVersionsError("Versions do not match across all files.")


def display_current_version(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    """Print the current version, or every match when verbose."""
    _check_consistency(args, matches)
    if args.verbose:
        _print_current_versions(matches, args.format)
        return
    print(matches[0].version.format(args.format))


def display_future_version(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    """Print the version the requested bump would produce."""
    _check_consistency(args, matches)
    print(matches[0].version.bump(args.part, args.pre_release).format(args.format))


def display_next_version(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    """Print every match with the version it would be changed to."""
    _check_consistency(args, matches)
    _print_version_changes(matches, args.part, args.pre_release, args.format, False)


def apply_next_version(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    """Write the bumped version into every versioned file."""
    _check_consistency(args, matches)
    new: Version | None = None
    for match in matches:
        new = match.version.bump(args.part, args.pre_release)
        write_version_update(match.file, match.line, new.format(args.format))

    if args.verbose:
        _print_version_changes(matches, args.part, args.pre_release, args.format, True)
    elif new is not None:
        print(new.format(args.format))


def initialize(root: str = ".") -> None:
    """Create a default ``.dover`` file unless one already exists."""
    path = os.path.join(root, DOVER_CONFIG_FILE)
    if file_exists(path):
        print(_paint("Dover configuration file `.dover` already exists!", _HI_MAGENTA))
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(DOVER_DEFAULT_CONFIG)
    print(_paint("Default `.dover` configuration file created.", _HI_GREEN))
    print("*** Be sure to add your project's versioned files! ***")


def _run(args: ExecutionArgs, matches: Sequence[VersionMatch]) -> None:
    changing = bool(args.part or args.pre_release)
    if args.initialize:
        initialize()
    elif args.echo:
        display_future_version(args, matches)
    elif not args.increment and not changing:
        display_current_version(args, matches)
    elif not args.increment:
        display_next_version(args, matches)
    elif changing:
        apply_next_version(args, matches)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the dover command and return its exit status."""
    argv = sys.argv[1:] if argv is None else list(argv)
    usage = new_usage_builder()
    try:
        opts = parse_args(argv)
    except UsageError:
        print(usage.usage_text(True), file=sys.stderr)
        return 1
    if opts["--help"]:
        print(usage.help_text(True))
        return 0
    if opts["--version"]:
        print(f"dover v{VERSION}")
        return 0

    args = _compile_arguments(opts)
    try:
        cfg = config_values()
        args = replace(args, format=select_format(args, cfg))
        matches = get_all_version_string_matches(cfg.files)
        _run(args, matches)
    except InconsistentVersionsError:
        return 1
    except (DoverError, OSError, ValueError) as err:
        print(_paint(str(err), _RED))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())