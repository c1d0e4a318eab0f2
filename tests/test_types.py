"""Tests for the error response model and Publit value converters."""

from datetime import datetime

import pytest

from publit_api import types
from publit_api.errors import APIResponseError


def test_error_response_parses_service_json():
    body = (
        '{"Code":400,"Type":"BadRequest",'
        '"errors":[{"Info":"Some error","Type":"BadRequest"}],'
        '"CombinedInfo":"Some error"}'
    )
    err = types.APIErrorResponse.model_validate_json(body)

    assert err.code == 400
    assert err.type == "BadRequest"
    assert err.errors == [types.APIError(info="Some error", type="BadRequest")]
    assert err.combined_info == "Some error"


@pytest.mark.parametrize(
    ("code", "type_", "info", "expected"),
    [
        (400, "BadRequest", "Some error", True),
        (0, "BadRequest", "Some error", False),
        (400, "", "Some error", False),
        (400, "BadRequest", "", False),
        (0, "", "", False),
    ],
)
def test_has_information(code, type_, info, expected):
    err = types.APIErrorResponse(code=code, type=type_, combined_info=info)
    assert err.has_information() is expected


def test_as_error_message():
    err = types.APIErrorResponse(code=400, type="BadRequest", combined_info="x").as_error()

    assert isinstance(err, APIResponseError)
    assert str(err) == 'Code: "400", Type: "BadRequest", Combined info: "x"'
    assert err.errors == []


def test_parse_publit_time():
    assert types.parse_publit_time("2017-07-14 16:12:03") == datetime(2017, 7, 14, 16, 12, 3)


def test_parse_publit_time_empty_is_none():
    assert types.parse_publit_time("") is None


def test_parse_publit_time_malformed_raises():
    with pytest.raises(ValueError):
        types.parse_publit_time("2017-07-14T16:12:03Z")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("false", False), ("FALSE", False), ("False", False), ("true", True), ("1", True), ("", True)],
)
def test_parse_publit_bool(value, expected):
    assert types.parse_publit_bool(value) is expected
