"""Domain-specific exceptions for POS Reports.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from PosReportsError for easy catching.
"""


class PosReportsError(Exception):
    """Base exception for all POS Reports errors.

    Users can catch this exception to handle any error raised by the
    stores or the CLI. The aggregation core itself never raises it.
    """

    pass


class ConfigError(PosReportsError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - A remote fetch is requested but no database URL is configured
    - The settings file exists but cannot be read or parsed
    """

    pass


class StoreError(PosReportsError):
    """Raised when a collaborator store cannot supply data.

    This exception is raised when:
    - The remote transaction fetch fails and no cached copy exists
    - The remote database returns an unexpected payload and no cache exists

    It is recoverable: callers can retry later or use another source.
    """

    pass
