"""CineSage taste profiling and recommendation package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["app", "create_app"]


def __getattr__(name: str) -> Any:
    # Deferred so importing the core services never builds the FastAPI app.
    if name in __all__:
        module = import_module("cinesage.main")
        return getattr(module, name)
    raise AttributeError(f"module 'cinesage' has no attribute {name}")
