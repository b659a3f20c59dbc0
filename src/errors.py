"""
Centralized, typed exceptions for the app.

The asset queries themselves never raise: absence is an Optional result.
These types cover everything around them (config, manifests, reads) so that:
- The CLI can surface user-friendly messages.
- Tests can expect a precise failure (e.g., ManifestLoadError).
"""

from __future__ import annotations


class PakError(Exception):
    """Base class for all custom errors in Photo Asset Kit."""


class ConfigLoadError(PakError):
    """Raised when a configuration file is missing, unreadable, or invalid."""


class ManifestLoadError(PakError):
    """Raised when an asset manifest cannot be read or does not validate."""


class ResourceReadError(PakError):
    """Raised by a resource reader when a resource has no readable content."""


class InternalError(PakError):
    """Raised for unexpected internal failures to be reported gracefully."""
