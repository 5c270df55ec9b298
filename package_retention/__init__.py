"""
Package Retention Enforcer

Deletes GitHub Packages versions that are older, less downloaded and of the
configured package type.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
