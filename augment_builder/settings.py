"""
settings.py

Responsibility: Describe the fixed names the build pipeline operates on and load
overrides for them from an optional YAML file.

The defaults reproduce the canonical `augment` layout:
- `config` and `bin/` directly under the configuration directory
- the generated entrypoint at `src/augment/run.cr`
- `shards` as the build tool

Nothing here reads the process environment except `default_config_dir`, which
only the CLI calls.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

SETTINGS_FILENAME = "builder.yaml"


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class BuildSettings:
    """Names and template knobs used by every build step."""

    build_tool: str = "shards"
    binary_name: str = "augment"
    config_file: str = "config"
    bin_dir: str = "bin"
    run_file: str = "src/augment/run.cr"
    debug_file: str = "augment.dwarf"
    indent: str = "    "
    generator: str = "Augment"
    root_command: str = "Augment::RootCommand.new"
    exception_class: str = "Augment::Exception"
    with_error_handler: bool = True


def default_config_dir(home: str | Path | None = None) -> Path:
    """
    Return `<home>/.augment`, using the current user's home directory when
    `home` is not given.
    """
    base = Path(home) if home is not None else Path.home()
    return base / ".augment"


def settings_from_mapping(data: dict[str, Any]) -> BuildSettings:
    known = {f.name: f for f in fields(BuildSettings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, raw in data.items():
        if raw is None:
            continue
        if isinstance(raw, (list, dict)):
            raise SettingsError(f"`{key}` must be a single value, not a list or mapping.")
        if known[key].type in ("bool", bool):
            if not isinstance(raw, bool):
                raise SettingsError(f"`{key}` must be true or false.")
            values[key] = raw
        else:
            # `indent` is whitespace by nature; keep it verbatim.
            value = str(raw) if key == "indent" else str(raw).strip()
            if not value and key != "indent":
                raise SettingsError(f"`{key}` must not be empty.")
            values[key] = value
    return BuildSettings(**values)


def load_settings(path: str | Path | None = None) -> BuildSettings:
    """
    Load `BuildSettings` from a YAML mapping.

    With no path the defaults are returned. Every key is optional; see
    `BuildSettings` for the accepted names.
    """
    if path is None:
        return BuildSettings()

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file does not exist: {settings_path}")

    try:
        data = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Settings file is not valid YAML: {settings_path}") from e
    if not isinstance(data, dict):
        raise SettingsError("Settings must be a mapping/object at the top level.")
    return settings_from_mapping(data)
