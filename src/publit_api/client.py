"""Authenticated client for the Publit APIs.

Holds the credentials needed to connect to the Publit APIs and signs every
request with them. This is a generic object: it knows nothing about specific
endpoints. Use :class:`publit_api.apiclient.APIClient` on top of it to talk
to an API.

Authentication uses HTTP Basic with a ``"<user>;<account id>"`` username.
Once the service hands out a token (``token`` response header) the client
sends it in a ``token`` request header and stops sending the password.
"""

import base64
import threading
from typing import Any, Protocol

import httpx
import pydantic
import structlog

from .errors import NoTokenError

DEFAULT_TIMEOUT = 30.0

TOKEN_HEADER = "token"


class Transport(Protocol):
    """The ability to perform one HTTP request.

    ``httpx.Client`` fulfils this protocol. Implementations raise
    ``httpx.HTTPError`` subclasses on transport failure.
    """

    def send(self, request: httpx.Request) -> httpx.Response: ...


class Logger(Protocol):
    """The ability to log info and debug messages."""

    def info(self, event: str, *args: Any, **kw: Any) -> Any: ...

    def debug(self, event: str, *args: Any, **kw: Any) -> Any: ...


class Credentials(pydantic.BaseModel):
    """User credentials for the Publit APIs.

    An ``account_id`` of 0 means no account is selected.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    user: str = ""
    password: str = pydantic.Field("", repr=False)
    account_id: int = pydantic.Field(0, ge=0)

    @property
    def username(self) -> str:
        """Username field of the Basic auth pair."""
        if self.account_id != 0:
            return f"{self.user};{self.account_id}"
        return f"{self.user};"


class AuthenticatedClient:
    """Signs and performs requests against the Publit APIs.

    Thread-safe: the token is the only mutable state and every read or
    write of it happens under an instance lock. The lock is never held
    across the network call.

    Can be used as a context manager; on exit the transport is closed if
    the client created it.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        token: str = "",
        transport: Transport | None = None,
        logger: Logger | None = None,
        harvest_tokens: bool = True,
    ):
        """Initialize the client.

        Args:
            credentials: User, password and optional account id.
            token: Token to start with, if one was obtained earlier.
            transport: Performs the HTTP requests (default: a new
                ``httpx.Client`` with a 30 second timeout).
            logger: Receives info and debug messages (default: this
                module's structlog logger).
            harvest_tokens: Pick up a ``token`` header from any response
                while no token is held. When False the token is only set
                by :meth:`set_new_api_token`.
        """
        self.credentials = credentials or Credentials()
        self.harvest_tokens = harvest_tokens
        self._token = token
        self._lock = threading.Lock()
        self._owns_transport = transport is None
        self._transport: Transport = transport or httpx.Client(
            timeout=DEFAULT_TIMEOUT,
        )
        self._logger: Logger = (
            logger if logger is not None else structlog.get_logger(__name__)
        )

    @property
    def transport(self) -> Transport:
        """The transport performing requests."""
        return self._transport

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the transport if it was created by this client."""
        if self._owns_transport and isinstance(self._transport, httpx.Client):
            self._transport.close()

    def call(self, request: httpx.Request) -> httpx.Response:
        """Perform an authenticated request.

        The authentication headers are set on ``request`` before it is
        sent.
        """
        self._set_auth(request)
        return self.call_raw(request)

    def call_raw(self, request: httpx.Request) -> httpx.Response:
        """Perform a request as is, without adding authentication.

        If no token is held and the response carries a ``token`` header,
        that token is stored. A missing header is not an error here.

        Raises:
            httpx.HTTPError: If the transport fails.
        """
        self._logger.info(
            "Calling URL",
            method=request.method,
            host=request.url.host,
            path=request.url.path,
            query=request.url.query.decode(),
        )
        try:
            response = self._transport.send(request)
        except httpx.HTTPError as err:
            self._logger.debug("Request failed", error=str(err))
            raise

        self._logger.info(
            "Request completed",
            method=request.method,
            host=request.url.host,
            path=request.url.path,
            status_code=response.status_code,
        )

        if self.harvest_tokens:
            # Harvesting is a side channel; the call's outcome is the response.
            try:
                self._set_token_if_absent(response)
            except NoTokenError as err:
                self._logger.debug("No token harvested", reason=str(err))

        return response

    def set_new_api_token(self, request: httpx.Request) -> None:
        """Perform a token issuance request and store the returned token.

        Any token already held is replaced.

        Raises:
            NoTokenError: If the response has no ``token`` header.
            httpx.HTTPError: If the transport fails.
        """
        try:
            response = self.call(request)
            token = _token_from_response(response)
        except (NoTokenError, httpx.HTTPError) as err:
            self._logger.debug("Could not set new API token", error=str(err))
            raise

        with self._lock:
            self._token = token

    def get_auth_token(self) -> str:
        """Return the current token, or an empty string if none is held."""
        with self._lock:
            return self._token

    def unset_auth_token(self) -> None:
        """Forget the token.

        The next authenticated call falls back to password authentication,
        which can be used to force re-authentication.
        """
        with self._lock:
            self._token = ""

    def _set_token_if_absent(self, response: httpx.Response) -> None:
        with self._lock:
            if self._token:
                return
        token = _token_from_response(response)
        with self._lock:
            # Another caller may have stored a token in the meantime.
            if not self._token:
                self._token = token

    def _set_auth(self, request: httpx.Request) -> None:
        password = self.credentials.password
        token = self.get_auth_token()
        if token:
            request.headers[TOKEN_HEADER] = token
            password = ""

        pair = f"{self.credentials.username}:{password}".encode()
        request.headers["Authorization"] = "Basic " + base64.b64encode(pair).decode()


def _token_from_response(response: httpx.Response) -> str:
    token = response.headers.get(TOKEN_HEADER, "")
    if not token:
        msg = "No token received in header. Could not set token from response."
        raise NoTokenError(msg)
    return token
