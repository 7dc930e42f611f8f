"""Shared error types for heatgrid loaders and entry points."""

from __future__ import annotations


class InputError(ValueError):
    """Raised when a simulation input is unreadable or malformed."""
