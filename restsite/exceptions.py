"""Application-level exception types.

Convention:
- ``InternalServerError``: for errors whose details must never reach clients.
  The global handler logs the full message at ERROR and returns a generic
  "Internal server error" (500) to the client.
- ``SchemaError`` and its subclasses: raised while the field schema registry
  is built at startup.  They abort startup; they are never raised at render time.
- ``FieldValidationError``: editor input that does not match a page schema.
  It is a ``ValueError``, so the global handler returns ``str(exc)`` as the
  422 detail.
"""

from __future__ import annotations


class InternalServerError(Exception):
    """Raised for internal errors whose details must not be exposed to clients.

    The global exception handler in ``restsite/main.py`` catches this, logs
    the full message server-side, and returns HTTP 500 with a generic
    ``"Internal server error"`` detail.
    """


class SchemaError(Exception):
    """Raised when a field schema declaration is malformed."""


class SchemaConflictError(SchemaError):
    """Raised when a template is registered twice with different fields."""


class RegistryFrozenError(SchemaError):
    """Raised when a schema is defined after the registry has been frozen."""


class FieldValidationError(ValueError):
    """Raised when editor-supplied field values do not match the page schema."""
