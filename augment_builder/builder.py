"""
builder.py

Responsibility: Build the `augment` binary and a dispatch script per command.

`Builder.build` runs five steps in order:
1) Delete the existing `bin` directory
2) Generate the run entrypoint from `config`
3) Build the binary with the build tool
4) Clean up byproducts (production only)
5) Generate a script for each command listed by the binary

The first failing step raises a `BuildError` and the remaining steps are not
run. Nothing is rolled back, so some files may already be updated while others
are not. Every generated file is recreated from `config` and the command list,
so a clean rebuild repairs whatever a failed run left behind.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import IO, Any, Callable

from augment_builder.renderer import render_run_file, render_script
from augment_builder.settings import BuildSettings

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]
Step = tuple[str, Callable[[], None]]

SCRIPT_MODE = 0o755


class BuildError(RuntimeError):
    """A build step failed; `cause` holds the underlying error, if any."""

    def __init__(self, message: str, cause: BaseException | None = None, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.stage = stage

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class Builder:
    """
    Orchestrates a build inside one configuration directory.

    `input`, `output` and `error` are handed to spawned processes; `None`
    inherits the parent's stream. `runner` spawns processes and defaults to
    `subprocess.run`.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        settings: BuildSettings | None = None,
        input: IO[Any] | int | None = None,
        output: IO[Any] | int | None = None,
        error: IO[Any] | int | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.directory = Path(directory)
        self.settings = settings or BuildSettings()
        self.input = input
        self.output = output
        self.error = error
        self._runner = runner or subprocess.run

    @property
    def bin_dir(self) -> Path:
        return self.directory / self.settings.bin_dir

    @property
    def run_file(self) -> Path:
        return self.directory / self.settings.run_file

    @property
    def binary(self) -> Path:
        return self.bin_dir / self.settings.binary_name

    def steps(self, development: bool = False) -> list[Step]:
        return [
            ("delete-bin", self.delete_bin),
            ("generate-run", self.generate_run),
            ("build-binary", lambda: self.build_binary(development)),
            ("clean-files", lambda: self.clean_files(development)),
            ("generate-scripts", self.generate_scripts),
        ]

    def build(self, development: bool = False) -> None:
        mode = "development" if development else "production"
        logger.info("Building %s in %s (%s)", self.settings.binary_name, self.directory, mode)
        for name, step in self.steps(development):
            logger.info("Step: %s", name)
            try:
                step()
            except BuildError as e:
                e.stage = name
                logger.debug("Step %s failed: %s", name, e)
                raise
        logger.info("Build complete")

    def delete_bin(self) -> None:
        """
        Delete the existing `bin` directory.

        A missing directory is a removal failure like any other.
        """
        try:
            shutil.rmtree(self.bin_dir)
        except OSError as e:
            raise BuildError("Failed to delete bin", e) from e

    def generate_run(self) -> None:
        """Regenerate the run entrypoint from the `config` file."""
        config_path = self.directory / self.settings.config_file
        try:
            # newline="" keeps carriage returns; lines split on "\n" only.
            with config_path.open(encoding="utf-8", newline="") as f:
                content = f.read()
            self.run_file.write_text(render_run_file(content, self.settings), encoding="utf-8", newline="\n")
        except (OSError, UnicodeDecodeError) as e:
            raise BuildError(f"Failed to generate {self.run_file.name}", e) from e
        logger.debug("Wrote %s", self.run_file)

    def build_binary(self, development: bool) -> None:
        args = [self.settings.build_tool, "build"]
        if not development:
            args.append("--production")

        # Production builds stay quiet; errors still reach `self.error`.
        output = self.output if development else subprocess.DEVNULL

        logger.debug("Running %s", " ".join(args))
        try:
            result = self._runner(args, cwd=str(self.directory), stdin=self.input, stdout=output, stderr=self.error)
        except OSError as e:
            raise BuildError("Failed to build binary", e) from e
        if result.returncode != 0:
            raise BuildError("Failed to build binary")

    def clean_files(self, development: bool) -> None:
        """Delete the debug symbols and the run entrypoint in production mode."""
        if development:
            logger.debug("Development build, keeping intermediate files")
            return
        try:
            (self.bin_dir / self.settings.debug_file).unlink()
            self.run_file.unlink()
        except OSError as e:
            raise BuildError("Failed to clean files", e) from e

    def list_commands(self) -> str:
        args = [str(self.binary), "list"]
        logger.debug("Running %s", " ".join(args))
        try:
            result = self._runner(
                args,
                cwd=str(self.directory),
                stdin=self.input,
                stdout=subprocess.PIPE,
                stderr=self.error,
            )
        except OSError as e:
            raise BuildError("Failed to list commands", e) from e
        if result.returncode != 0:
            raise BuildError("Failed to list commands")
        try:
            return (result.stdout or b"").decode("utf-8")
        except UnicodeDecodeError as e:
            raise BuildError("Failed to list commands", e) from e

    def generate_scripts(self) -> None:
        """
        Write `bin/<command>` for each command the binary lists.

        The listing ends at the first blank line; anything after it is ignored.
        """
        commands = self.list_commands()
        try:
            for command in commands.split("\n"):
                if not command:
                    return
                if command in (self.settings.binary_name, self.settings.debug_file):
                    logger.warning("Command %r overwrites a build output in %s", command, self.bin_dir)
                path = self.bin_dir / command
                path.write_text(render_script(command, self.settings), encoding="utf-8", newline="\n")
                path.chmod(SCRIPT_MODE)
                logger.debug("Wrote script %s", path)
        except (OSError, ValueError) as e:
            raise BuildError("Failed to generate scripts", e) from e
