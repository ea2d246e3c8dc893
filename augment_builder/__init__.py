"""
augment_builder package

This package implements augment-build as a CLI-first utility.

Key responsibilities are split across modules:
- `settings.py`: fixed names and template knobs, optionally loaded from YAML
- `renderer.py`: text of the generated run entrypoint and dispatch scripts
- `builder.py`: the five-step build pipeline and `BuildError`
- `cli.py`: CLI entrypoint (settings -> build -> exit code)
"""

from __future__ import annotations

from augment_builder.builder import Builder, BuildError
from augment_builder.settings import BuildSettings

__all__ = ["Builder", "BuildError", "BuildSettings", "__version__"]

__version__ = "0.1.0"
