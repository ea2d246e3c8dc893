"""
cli.py

Responsibility: CLI entrypoint for augment-build.

High-level flow (single command `build`):
1) Resolve the configuration directory (default `~/.augment`)
2) Load settings (`--settings`, else `<dir>/builder.yaml` when present)
3) Run `Builder.build`, reporting a failed step on stderr with exit code 1

This module should orchestrate behavior but keep concerns isolated:
- Settings: `settings.py`
- Templates: `renderer.py`
- Build steps: `builder.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from augment_builder.builder import Builder, BuildError
from augment_builder.settings import SETTINGS_FILENAME, BuildSettings, SettingsError, default_config_dir, load_settings

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _resolve_settings(directory: Path, settings_path: str | None) -> BuildSettings:
    if settings_path:
        return load_settings(settings_path)
    candidate = directory / SETTINGS_FILENAME
    if candidate.is_file():
        logger.debug("Using settings from %s", candidate)
        return load_settings(candidate)
    return load_settings()


def build_cmd(args: argparse.Namespace) -> int:
    directory = Path(args.dir).expanduser() if args.dir else default_config_dir()
    if not directory.is_dir():
        raise CLIError(f"Configuration directory not found: {directory}")

    settings = _resolve_settings(directory, args.settings)

    # CLI overrides
    if args.no_error_handler:
        settings = replace(settings, with_error_handler=False)

    builder = Builder(directory, settings=settings)
    builder.build(development=bool(args.development))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="augment-build", description="Build the augment binary and its command scripts")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Regenerate run.cr, build the binary, and write command scripts")
    b.add_argument(
        "--development",
        action="store_true",
        help="Development build: show build output and keep run.cr and debug symbols",
    )
    b.add_argument("--dir", default=None, help="Configuration directory (default: ~/.augment)")
    b.add_argument("--settings", default=None, help=f"YAML settings file (default: <dir>/{SETTINGS_FILENAME} if present)")
    b.add_argument(
        "--no-error-handler",
        action="store_true",
        help="Generate run.cr without the top-level error handler",
    )

    b.set_defaults(func=build_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose), bool(args.quiet))
    try:
        return int(args.func(args))
    except (BuildError, SettingsError, CLIError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
