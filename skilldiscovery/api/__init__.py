# skilldiscovery/api/__init__.py
# This file makes the api directory a Python package.

from . import skills

__all__ = ["skills"]
