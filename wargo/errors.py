"""Base exception shared by every wargo stage."""

from __future__ import annotations


class WargoError(RuntimeError):
    """Base exception for failures the CLI reports to the user."""
