"""CRUD package exports with lazy module loading.

The store modules are read-only views over the catalog (`skill`) and the
member records (`user`).
"""

from importlib import import_module

__all__ = ["user", "skill"]


def __getattr__(name):
    if name in __all__:
        return import_module(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
