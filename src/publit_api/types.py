"""Response types for the Publit REST API.

Pydantic models for the uniform error body the service returns on failed
requests, plus converters for the string encoded values (timestamps and
booleans) that appear in Publit responses.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .errors import APIResponseError

PUBLIT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class APIError(BaseModel):
    """A single sub-error inside an error response."""

    model_config = ConfigDict(populate_by_name=True)

    info: str = Field("", alias="Info")
    type: str = Field("", alias="Type")


class APIErrorResponse(BaseModel):
    """General Publit API error response.

    Most errors received from the Publit APIs conform to this shape:
    ``{"Code": 400, "Type": "BadRequest", "errors": [...], "CombinedInfo": "..."}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: int = Field(0, alias="Code")
    type: str = Field("", alias="Type")
    errors: list[APIError] | None = Field(
        None,
        alias="errors",
        validation_alias=AliasChoices("errors", "Errors"),
    )
    combined_info: str = Field("", alias="CombinedInfo")

    def has_information(self) -> bool:
        """Return True when code, type and combined info are all set."""
        return self.code != 0 and self.type != "" and self.combined_info != ""

    def as_error(self) -> APIResponseError:
        """Build the exception describing this error response."""
        msg = (
            f'Code: "{self.code}", Type: "{self.type}", '
            f'Combined info: "{self.combined_info}"'
        )
        return APIResponseError(
            msg,
            code=self.code,
            type=self.type,
            errors=list(self.errors or []),
            combined_info=self.combined_info,
        )


def parse_publit_time(value: str) -> datetime | None:
    """Convert a Publit timestamp string to a datetime.

    Publit timestamps look like ``2017-07-14 16:12:03``. An empty string
    means the value is unset and yields None.

    Raises:
        ValueError: If the string is not in the Publit format.
    """
    if not value:
        return None
    return datetime.strptime(value, PUBLIT_TIME_FORMAT)  # noqa: DTZ007


def parse_publit_bool(value: str) -> bool:
    """Convert a Publit boolean string; only "false" (any case) is False."""
    return value.lower() != "false"
