"""
notes_client/errors.py

Error taxonomy for the notes client.

Only ConfigError is fatal. The controller recovers from the other three by
surfacing their message and staying interactive.
"""


class NotesError(Exception):
    """Base class for every error raised by the notes client."""


class ConfigError(NotesError):
    """Required configuration (service URL or access key) is missing."""


class FetchError(NotesError, RuntimeError):
    """Listing notes failed (transport, auth, or API error)."""


class WriteError(NotesError, RuntimeError):
    """A create, update, or delete was rejected or matched no row."""


class ValidationError(NotesError, ValueError):
    """Local input check failed; no network call was attempted."""
