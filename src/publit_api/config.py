"""Configuration for building a Publit API client from a file."""

import json
import os
import pathlib

import httpx
import pydantic
import structlog

from . import apiclient, client, log

CONFIG_ENV_VAR = "PUBLIT_API_CONFIG_PATH"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for a Publit API client."""

    base_url: str = pydantic.Field(description="Base URL of the Publit service")
    api: str = pydantic.Field("", description="Name of the API, e.g. publishing")
    user: str = pydantic.Field("", description="API user name")
    password: str = pydantic.Field("", description="API password", repr=False)
    account_id: int = pydantic.Field(
        0,
        description="Account to act on, 0 for none",
        ge=0,
    )
    timeout: float = pydantic.Field(
        client.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    harvest_tokens: bool = pydantic.Field(
        True,
        description="Pick up tokens from any response while unauthenticated",
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")
    log_json: bool = pydantic.Field(True, description="Log JSON lines")

    @pydantic.field_validator("base_url")
    @classmethod
    def _base_url_set(cls, value: str) -> str:
        if not value:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        return value.rstrip("/")


def load_config(config_path: str | None = None) -> ClientConfig:
    """Load configuration from a JSON file.

    Falls back to the path in ``PUBLIT_API_CONFIG_PATH`` when no path is
    given.
    """
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not resolved_path:
        msg = f"No configuration path given and {CONFIG_ENV_VAR} is not set"
        raise FileNotFoundError(msg)

    path = pathlib.Path(resolved_path)
    if not path.exists():
        msg = f"Configuration file not found: {resolved_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig(**data)


def create_api_client(config: ClientConfig) -> apiclient.APIClient:
    """Construct an APIClient with its authenticated client from config."""
    auth_client = client.AuthenticatedClient(
        client.Credentials(
            user=config.user,
            password=config.password,
            account_id=config.account_id,
        ),
        transport=httpx.Client(timeout=config.timeout),
        logger=log.make_logger(
            log.LogConfig(level=config.log_level, json_format=config.log_json),
        ),
        harvest_tokens=config.harvest_tokens,
    )
    logger.info("Created API client", base_url=config.base_url, api=config.api)
    return apiclient.APIClient(auth_client, base_url=config.base_url, api=config.api)
