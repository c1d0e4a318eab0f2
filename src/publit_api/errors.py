"""Exception hierarchy for the Publit API client.

Transport failures are not wrapped: ``httpx.HTTPError`` subclasses propagate
to the caller unchanged, as do JSON/pydantic serialization errors.
"""

from typing import Any


class PublitAPIError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(PublitAPIError, ValueError):
    """Raised when the client is missing configuration needed for a call."""


class NoTokenError(PublitAPIError):
    """Raised when a token issuance response carries no ``token`` header."""


class EndpointError(PublitAPIError):
    """Raised when an endpoint cannot be resolved to a path."""


class EndpointNotFoundError(EndpointError, KeyError):
    """Raised when no template is registered for an endpoint key."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class QualifierCountError(EndpointError):
    """Raised when the qualifier count does not match the template."""


class APIResponseError(PublitAPIError):
    """A non-success response normalized into a single error.

    Attributes:
        code: The error code reported by the service, or the HTTP status.
        type: Short error type label (empty when the service sent none).
        errors: Sub-errors reported by the service.
        combined_info: Human-readable message combining all sub-errors.
    """

    def __init__(
        self,
        message: str,
        code: int,
        type: str = "",  # noqa: A002
        errors: list[Any] | None = None,
        combined_info: str = "",
    ):
        super().__init__(message)
        self.code = code
        self.type = type
        self.errors = errors or []
        self.combined_info = combined_info


class UnauthorizedError(APIResponseError):
    """Raised for 401 responses without an informative error body."""
