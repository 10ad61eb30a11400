# turfbook/exceptions.py
"""
Exceptions raised by turfbook.

The slot and search engines never raise on malformed data; these cover
configuration mistakes and the verified token path only.
"""


class TurfbookError(Exception):
    """Base class for all turfbook errors."""


class ConfigurationError(TurfbookError):
    """Invalid static configuration (slot grid, route policy)."""


class TokenVerificationError(TurfbookError):
    """Token signature or claims failed verification."""
