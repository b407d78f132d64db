"""
aver: GitHub Actions version checker

Reports workflow actions pinned to outdated tags, honoring the precision of
the pinned version, and SHA-pinned actions that trail their default branch.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
