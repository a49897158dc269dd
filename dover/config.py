"""Finding and reading the dover configuration."""

from __future__ import annotations

import glob
import json
import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any

from .search import file_exists, split_file_and_line_notation
from .version import DoverError

DOVER_CONFIG_FILE = ".dover"
PYPROJECT_CONFIG_FILE = "pyproject.toml"
PACKAGE_JSON_CONFIG_FILE = "package.json"

DEFAULT_VERSION_FORMAT = "000.A.0"

DOVER_DEFAULT_CONFIG = """[dover]
version_format = "000-A.0"
versioned_files = [
]
"""


class ConfigError(DoverError):
    """The configuration is missing or unusable."""


@dataclass(frozen=True)
class ConfigValues:
    """The versioned files and the version format read from a config file."""

    files: list[str] = field(default_factory=list)
    format: str = ""


def find_config_file(name: str, root: str = ".") -> str:
    """Return the path of config file ``name`` inside ``root``."""
    entries = glob.glob(name, root_dir=root)
    if len(entries) == 1:
        return os.path.join(root, entries[0])
    raise ConfigError(f"could not find {name} config")


def _section(data: dict[str, Any], *keys: str) -> dict[str, Any] | None:
    node: Any = data
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, dict) else None


def _values_from_section(section: dict[str, Any]) -> ConfigValues:
    files = section.get("versioned_files", [])
    if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
        raise ConfigError("versioned_files must be a list of strings")
    spec = section.get("version_format", "")
    if not isinstance(spec, str):
        raise ConfigError("version_format must be a string")
    return ConfigValues(list(files), spec)


def parse_toml_config(text: str, source: str) -> ConfigValues:
    """Read the dover section of a ``.dover`` or ``pyproject.toml`` document."""
    data = tomllib.loads(text)
    for keys in (("dover",), ("tool", "dover")):
        section = _section(data, *keys)
        if section is not None:
            return _values_from_section(section)
    raise ConfigError(f"No dover config entries in {source}")


def load_toml_config(path: str) -> ConfigValues:
    """Read a TOML config file."""
    with open(path, encoding="utf-8") as handle:
        return parse_toml_config(handle.read(), path)


def parse_json_config(content: str) -> ConfigValues:
    """Read the dover section of a ``package.json`` document."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as err:
        raise ConfigError(f"json parsing failed: {err}") from err
    if not isinstance(payload, dict):
        raise ConfigError("json parsing failed: top level value is not an object")
    section = payload.get("dover") or {}
    if not isinstance(section, dict):
        raise ConfigError("json parsing failed: `dover` is not an object")
    try:
        values = _values_from_section(section)
    except ConfigError as err:
        raise ConfigError(f"json parsing failed: {err}") from err
    if not values.files:
        raise ConfigError(
            "no `dover` section or `dover.versioned_files` contains no file references"
        )
    return values


def load_json_config(path: str) -> ConfigValues:
    """Read a JSON config file."""
    with open(path, encoding="utf-8") as handle:
        return parse_json_config(handle.read())


_PARSERS = {
    DOVER_CONFIG_FILE: load_toml_config,
    PYPROJECT_CONFIG_FILE: load_toml_config,
    PACKAGE_JSON_CONFIG_FILE: load_json_config,
}


def config_values(root: str = ".") -> ConfigValues:
    """Load the first usable configuration found in ``root``."""
    for name, parser in _PARSERS.items():
        try:
            path = find_config_file(name, root)
        except ConfigError:
            continue

        try:
            cfg = parser(path)
        except ConfigError as err:
            print(f"{name}: {err}", end="")
            continue

        if not cfg.files:
            raise ConfigError(f"`{name}` config has no versioned_files")

        for entry in cfg.files:
            file_path, _ = split_file_and_line_notation(entry)
            if not file_exists(os.path.join(root, file_path)):
                raise ConfigError(f"no such file: {file_path}")

        if not cfg.format:
            cfg = replace(cfg, format=DEFAULT_VERSION_FORMAT)
        return cfg

    raise ConfigError("unable to find dover configuration")