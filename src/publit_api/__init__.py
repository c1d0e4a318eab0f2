"""Publit API client.

Credential-aware HTTP client for the Publit REST APIs: signs requests with
basic auth or a service issued token, resolves templated endpoints and turns
failed responses into descriptive errors.

Exports:
    AuthenticatedClient: Signs and performs requests, manages the token.
    Credentials: User, password and account id.
    APIClient: GET/POST/PUT/DELETE against one API.
    Resource: Endpoint key plus qualifiers.
    make_response_error: Normalizes a failed response into an error.
"""

from .apiclient import API_VERSION, APIClient, make_response_error
from .client import DEFAULT_TIMEOUT, AuthenticatedClient, Credentials
from .endpoint import Resource
from .errors import (
    APIResponseError,
    ConfigurationError,
    EndpointError,
    EndpointNotFoundError,
    NoTokenError,
    PublitAPIError,
    QualifierCountError,
    UnauthorizedError,
)

__version__ = "0.1.0"

__all__ = [
    "API_VERSION",
    "DEFAULT_TIMEOUT",
    "APIClient",
    "APIResponseError",
    "AuthenticatedClient",
    "ConfigurationError",
    "Credentials",
    "EndpointError",
    "EndpointNotFoundError",
    "NoTokenError",
    "PublitAPIError",
    "QualifierCountError",
    "Resource",
    "UnauthorizedError",
    "make_response_error",
]
