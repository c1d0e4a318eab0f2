"""Tests for endpoint template resolution."""

import enum

import pytest

from publit_api import endpoint
from publit_api.errors import EndpointNotFoundError, QualifierCountError


class Endpoint(enum.IntEnum):
    TEST = 1
    TEST_ONE = 2
    TEST_MANY = 3
    RESOURCE = 4


TEST_ENDPOINTS = {
    Endpoint.TEST: "test",
    Endpoint.TEST_ONE: "test/%v",
    Endpoint.TEST_MANY: "test/%v;%v/%v",
    Endpoint.RESOURCE: "resource/%v",
}


def test_resource_fulfils_endpointer():
    """Resource can be passed wherever an Endpointer is expected."""
    r: endpoint.Endpointer = endpoint.Resource(Endpoint.TEST, endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "test"


def test_plain_endpoint_is_returned_unchanged():
    r = endpoint.Resource(Endpoint.TEST, endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "test"


def test_one_qualifier_is_substituted():
    r = endpoint.Resource(Endpoint.RESOURCE, qualifiers=[5], endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "resource/5"


def test_multiple_qualifiers_are_substituted_in_order():
    r = endpoint.Resource(
        Endpoint.TEST_MANY,
        qualifiers=["somestring", 2, "someotherstring"],
        endpoints=TEST_ENDPOINTS,
    )
    assert r.get_endpoint() == "test/somestring;2/someotherstring"


def test_plain_int_key_matches_intenum_key():
    """Keys may be given as plain ints when the table uses IntEnum members."""
    r = endpoint.Resource(2, qualifiers=["x"], endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "test/x"


@pytest.mark.parametrize(("flag", "expected"), [(True, "test/true"), (False, "test/false")])
def test_boolean_qualifiers_render_lowercase(flag, expected):
    r = endpoint.Resource(Endpoint.TEST_ONE, qualifiers=[flag], endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == expected


def test_qualifiers_are_not_escaped():
    r = endpoint.Resource(Endpoint.TEST_ONE, qualifiers=["a b/c"], endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "test/a b/c"


def test_qualifier_containing_placeholder_is_inserted_literally():
    r = endpoint.Resource(Endpoint.TEST_ONE, qualifiers=["%v"], endpoints=TEST_ENDPOINTS)
    assert r.get_endpoint() == "test/%v"


@pytest.mark.parametrize(
    ("key", "qualifiers"),
    [
        (Endpoint.RESOURCE, []),
        (Endpoint.TEST, [1]),
        (Endpoint.TEST_MANY, ["a", "b"]),
    ],
)
def test_qualifier_count_mismatch_raises(key, qualifiers):
    r = endpoint.Resource(key, qualifiers=qualifiers, endpoints=TEST_ENDPOINTS)
    with pytest.raises(QualifierCountError, match="did not match expected"):
        r.get_endpoint()


def test_mismatch_message_reports_counts():
    r = endpoint.Resource(Endpoint.TEST_MANY, qualifiers=[1], endpoints=TEST_ENDPOINTS)
    with pytest.raises(QualifierCountError, match="Got 1, expected 3"):
        r.get_endpoint()


def test_unknown_endpoint_raises():
    r = endpoint.Resource(99, endpoints=TEST_ENDPOINTS)
    with pytest.raises(EndpointNotFoundError):
        r.get_endpoint()
