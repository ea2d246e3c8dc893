from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest


class FakeRunner:
    """
    Stand-in for `subprocess.run`.

    The build tool call creates `bin/` with the binary and debug symbols; the
    `list` call prints `commands`.
    """

    def __init__(self, directory: Path, *, commands: str | bytes = "foo\nbar\n", build_code: int = 0, list_code: int = 0) -> None:
        self.directory = directory
        self.commands = commands
        self.build_code = build_code
        self.list_code = list_code
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, args: list[str], **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        self.calls.append((list(args), kwargs))
        if args[1:2] == ["build"]:
            if self.build_code == 0:
                bin_dir = self.directory / "bin"
                bin_dir.mkdir(exist_ok=True)
                (bin_dir / "augment").write_text("binary", encoding="utf-8")
                (bin_dir / "augment.dwarf").write_text("symbols", encoding="utf-8")
            return subprocess.CompletedProcess(args, self.build_code)
        if args[1:2] == ["list"]:
            stdout = self.commands.encode("utf-8") if isinstance(self.commands, str) else self.commands
            return subprocess.CompletedProcess(args, self.list_code, stdout=stdout)
        raise AssertionError(f"unexpected command: {args}")

    def commands_run(self) -> list[list[str]]:
        return [args for args, _kwargs in self.calls]


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / ".augment"
    (d / "src" / "augment").mkdir(parents=True)
    (d / "bin").mkdir()
    (d / "config").write_text('command "hello" do\n  puts "hi"\nend\n', encoding="utf-8")
    return d


@pytest.fixture
def runner(config_dir: Path) -> FakeRunner:
    return FakeRunner(config_dir)


@pytest.fixture
def make_runner(config_dir: Path):
    def factory(**kwargs: Any) -> FakeRunner:
        return FakeRunner(config_dir, **kwargs)

    return factory
