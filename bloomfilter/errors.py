"""Exceptions raised by the Bloom filter package."""
from __future__ import annotations


class InvalidParameters(ValueError):
    """Raised when a filter or its sizing is requested with unusable parameters.

    Subclasses ``ValueError`` so callers catching the conventional error for
    bad arguments keep working.
    """
