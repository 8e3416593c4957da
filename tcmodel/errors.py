"""Error hierarchy for tcmodel.

Every error raised by the codec, the membership operations and the
in-memory transport derives from ``TeamCityModelError``. None of them are
retried or recovered from inside the package.
"""


class TeamCityModelError(Exception):
    """Base exception for tcmodel errors."""

    pass


class InvalidArgumentError(TeamCityModelError, ValueError):
    """Raised when a constructor or operation receives malformed input."""

    pass


class NotFoundError(TeamCityModelError, LookupError):
    """Raised when a lookup by id or name matches no entity."""

    pass


class ConflictError(TeamCityModelError):
    """Raised when a creation would violate a uniqueness constraint."""

    pass


class InvalidOperationError(TeamCityModelError):
    """Raised when an operation is structurally disallowed."""

    pass
