"""Generic client for the Publit API interface.

Implements the operations most Publit APIs share (status check, token
issuance, GET, POST, PUT, DELETE) on top of an :class:`APICaller`, which
:class:`publit_api.client.AuthenticatedClient` fulfils.
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias

import httpx
import pydantic
import pydantic_core
import structlog

from .endpoint import Endpointer
from .errors import APIResponseError, ConfigurationError, UnauthorizedError
from .query import Query, QueryModifier
from .types import APIErrorResponse

logger = structlog.get_logger(__name__)

# Supported version of the Publit APIs.
API_VERSION = "v2.0"

RESOURCE_STATUS_CHECK = "status_check"
RESOURCE_TOKEN = "token"

HeaderModifier: TypeAlias = Callable[[httpx.Headers], None]


class APICaller(Protocol):
    """How :class:`APIClient` performs requests."""

    def call(self, request: httpx.Request) -> httpx.Response: ...

    def call_raw(self, request: httpx.Request) -> httpx.Response: ...

    def set_new_api_token(self, request: httpx.Request) -> None: ...

    def unset_auth_token(self) -> None: ...


class APIClient:
    """Verb-shaped access to one Publit API.

    Every completed call appends its HTTP status code to a history
    (``0`` when no response was obtained). The history is not guarded by a
    lock: when one APIClient is shared between threads, the codes are only
    meaningful if callers synchronize around their calls.
    """

    def __init__(self, client: APICaller, base_url: str = "", api: str = ""):
        """Initialize the API client.

        Args:
            client: Performs (authenticated) requests. May be shared with
                other APIClient instances.
            base_url: Base URL of the Publit service, e.g.
                "https://api.publit.com".
            api: Name of the API, e.g. "publishing".
        """
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api = api
        self._response_codes: list[int] = []

    def status_check(self) -> bool:
        """Check whether the Publit service is up.

        Returns:
            True if the service answered 200, False for any other status.

        Raises:
            ConfigurationError: If base_url is not set.
            httpx.HTTPError: If the request fails.
        """
        try:
            url = self._compile_status_check_url()
        except ConfigurationError:
            self._response_codes.append(0)
            raise

        # No authentication is needed for the status check.
        response = self._perform(httpx.Request("GET", url), authenticate=False)
        return response.status_code == httpx.codes.OK

    def set_new_api_token(self) -> None:
        """Request a new token and store it in the underlying client.

        Raises:
            ConfigurationError: If base_url or api is not set.
            NoTokenError: If the response carries no token.
            httpx.HTTPError: If the request fails.
        """
        url = self._compile_token_url()
        self.client.set_new_api_token(httpx.Request("POST", url))

    def get(
        self,
        endpoint: Endpointer,
        model: Any = None,
        *query_modifiers: QueryModifier,
    ) -> Any:
        """Perform a GET request and decode the JSON response.

        Args:
            endpoint: Resolves to the resource path.
            model: Type to validate the body into (a pydantic model,
                ``list[Model]``, ``dict``...). The parsed JSON is returned
                as is when None. Always pass it (``None`` if no model is
                wanted) before any query modifiers: ``get(ep, None,
                query_limit(10))``. A modifier in this position would be
                taken as the model.
            *query_modifiers: Each appends parameters to the query string.

        Raises:
            EndpointError: If the endpoint cannot be resolved.
            APIResponseError: If the response status is not 200.
            httpx.HTTPError: If the request fails.
            pydantic.ValidationError: If the body does not fit ``model``.
        """
        url = self.compile_endpoint_url(endpoint.get_endpoint())
        query: Query = []
        for modify in query_modifiers:
            modify(query)

        response = self._perform(httpx.Request("GET", url, params=query))
        return self._decode(response, model)

    def get_with_raw_response(
        self,
        endpoint: Endpointer,
        *query_modifiers: QueryModifier,
    ) -> httpx.Response:
        """Perform a GET request and return the response without checks.

        Use when the body is needed verbatim.
        """
        url = self.compile_endpoint_url(endpoint.get_endpoint())
        query: Query = []
        for modify in query_modifiers:
            modify(query)

        return self._perform(httpx.Request("GET", url, params=query))

    def post(
        self,
        endpoint: Endpointer,
        payload: Any,
        model: Any = None,
        *header_modifiers: HeaderModifier,
    ) -> Any:
        """Perform a POST request with a JSON payload."""
        return self._post_put("POST", endpoint, payload, model, *header_modifiers)

    def put(
        self,
        endpoint: Endpointer,
        payload: Any,
        model: Any = None,
        *header_modifiers: HeaderModifier,
    ) -> Any:
        """Perform a PUT request with a JSON payload."""
        return self._post_put("PUT", endpoint, payload, model, *header_modifiers)

    def delete(
        self,
        endpoint: Endpointer,
        model: Any = None,
        *header_modifiers: HeaderModifier,
    ) -> Any:
        """Perform a DELETE request and decode the JSON response."""
        url = self.compile_endpoint_url(endpoint.get_endpoint())
        headers = httpx.Headers()
        for modify in header_modifiers:
            modify(headers)

        response = self._perform(httpx.Request("DELETE", url, headers=headers))
        return self._decode(response, model)

    def unset_auth_token(self) -> None:
        """Forget the token held by the underlying client."""
        self.client.unset_auth_token()

    def get_last_response_code(self) -> int:
        """Status code of the most recent call, 0 if there was none."""
        if not self._response_codes:
            return 0
        return self._response_codes[-1]

    def get_response_codes(self) -> list[int]:
        """All status codes observed so far, oldest first."""
        return list(self._response_codes)

    def compile_endpoint_url(self, endpoint: str) -> str:
        """Build the URL of a resource: ``<base_url>/<api>/<version>/<endpoint>``.

        The api segment is left out when no api name is set.
        """
        if self.api:
            return f"{self.base_url}/{self.api}/{API_VERSION}/{endpoint}"
        return f"{self.base_url}/{API_VERSION}/{endpoint}"

    def _compile_status_check_url(self) -> str:
        if not self.base_url:
            msg = "Could not compile status check URL. Missing APIClient.base_url"
            raise ConfigurationError(msg)
        return f"{self.base_url}/{API_VERSION}/{RESOURCE_STATUS_CHECK}"

    def _compile_token_url(self) -> str:
        if not self.base_url or not self.api:
            msg = (
                "Could not compile token URL, missing one or both of "
                "APIClient.base_url or APIClient.api"
            )
            raise ConfigurationError(msg)
        return f"{self.base_url}/{self.api}/{API_VERSION}/{RESOURCE_TOKEN}"

    def _post_put(
        self,
        method: str,
        endpoint: Endpointer,
        payload: Any,
        model: Any,
        *header_modifiers: HeaderModifier,
    ) -> Any:
        url = self.compile_endpoint_url(endpoint.get_endpoint())
        body = pydantic_core.to_json(payload, by_alias=True)

        headers = httpx.Headers({"Content-Type": "application/json"})
        for modify in header_modifiers:
            modify(headers)

        request = httpx.Request(method, url, content=body, headers=headers)
        response = self._perform(request)
        return self._decode(response, model)

    def _perform(
        self,
        request: httpx.Request,
        authenticate: bool = True,
    ) -> httpx.Response:
        """Send the request and record its status code."""
        call = self.client.call if authenticate else self.client.call_raw
        try:
            response = call(request)
        except Exception:
            self._response_codes.append(0)
            raise
        self._response_codes.append(response.status_code)
        return response

    def _decode(self, response: httpx.Response, model: Any) -> Any:
        if response.status_code != httpx.codes.OK:
            raise make_response_error(response)
        if model is None:
            return response.json()
        return pydantic.TypeAdapter(model).validate_json(response.content)


def make_response_error(response: httpx.Response) -> APIResponseError:
    """Build the most descriptive error available for a failed response.

    Uses the service's JSON error body when it carries a code, type and
    combined info. Otherwise falls back to an unauthorized error for 401
    and a generic error for any other status.
    """
    content_type = response.headers.get("Content-Type", "")
    if content_type.split(";")[0].strip().lower() == "application/json":
        try:
            api_error = APIErrorResponse.model_validate_json(response.content)
        except pydantic.ValidationError:
            logger.debug(
                "Error response body could not be decoded",
                status_code=response.status_code,
            )
        else:
            if api_error.has_information():
                return api_error.as_error()

    if response.status_code == httpx.codes.UNAUTHORIZED:
        msg = f'Unauthorized. Code: "{response.status_code}"'
        return UnauthorizedError(msg, code=response.status_code)

    msg = f'Response not ok. No information given. Code: "{response.status_code}"'
    return APIResponseError(msg, code=response.status_code)
