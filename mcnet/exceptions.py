"""
Exception hierarchy for mcnet.

Only unrecoverable input problems are raised as exceptions. Outcomes that a
caller is expected to handle (a null-model graph that could not be
synthesised, a coefficient that is undefined) are returned as result records
instead.
"""


class MotifClusteringError(Exception):
    """Base class for all mcnet errors."""


class InputError(MotifClusteringError, ValueError):
    """Raised for malformed patterns, unreadable graphs or invalid parameters."""


class CatalogueOverflowError(InputError):
    """Raised when a clustering-type catalogue is requested for an unsupported motif size."""


class ClassificationError(MotifClusteringError):
    """Raised when an overlapping instance pair matches no clustering type."""
