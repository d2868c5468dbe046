"""CLI package for computing cooling runs and talking to the run service."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer application lives in ``cli.app``.  Re-exporting it from the package
# root would shadow the module path that tests patch attributes on.

__all__ = []
