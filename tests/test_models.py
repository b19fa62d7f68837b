import pytest

from api_network.codec import JSONCodec
from api_network.errors import ConstructionError, EncodingError
from api_network.models import HTTPMethod, Request


def test_with_query_keeps_repeated_names():
    request = Request(url="https://api.example.com/items")
    updated = request.with_query("a", "1").with_query("a", "2")
    assert updated.url == "https://api.example.com/items?a=1&a=2"


def test_with_query_appends_to_existing_query_and_keeps_fragment():
    request = Request(url="https://api.example.com/items?page=2#top")
    updated = request.with_query("q", "red shoes")
    assert updated.url == "https://api.example.com/items?page=2&q=red%20shoes#top"


def test_with_query_does_not_mutate_original():
    request = Request(url="https://api.example.com/items")
    request.with_query("a", "1")
    assert request.url == "https://api.example.com/items"


def test_with_query_on_unparsable_url_is_a_no_op():
    request = Request(url="https://[::1/items")
    assert request.with_query("a", "1") is request


def test_with_body_sets_method_header_and_payload():
    request = Request(url="https://api.example.com/users")
    updated = request.with_body({"x": 1}, HTTPMethod.POST)
    assert updated.method == "POST"
    assert updated.header("Content-Type") == "application/json"
    assert JSONCodec().decode(updated.body) == {"x": 1}
    assert request.body is None
    assert request.headers == {}


def test_with_body_converts_field_names():
    updated = Request(url="https://api.example.com/users").with_body({"userId": 9}, "patch")
    assert updated.method == "PATCH"
    assert updated.body == b'{"user_id":9}'
    assert JSONCodec().decode(updated.body) == {"userId": 9}


def test_with_body_raises_encoding_error():
    with pytest.raises(EncodingError):
        Request(url="https://api.example.com/users").with_body({"bad": {1, 2}}, HTTPMethod.POST)


def test_with_method_sets_content_type_without_body():
    updated = Request(url="https://api.example.com/users/1").with_method(HTTPMethod.DELETE)
    assert updated.method == "DELETE"
    # JSON content type is declared even though there is no body.
    assert updated.header("content-type") == "application/json"
    assert updated.body is None


def test_with_method_keeps_existing_body():
    request = Request(url="https://api.example.com/users").with_body({"x": 1}, HTTPMethod.POST)
    assert request.with_method(HTTPMethod.PATCH).body == request.body


def test_unsupported_method_is_rejected():
    with pytest.raises(ConstructionError):
        Request(url="https://api.example.com").with_method("PUT")


def test_with_header_replaces_other_spellings():
    request = Request(url="https://api.example.com", headers={"content-type": "text/plain"})
    updated = request.with_header("Content-Type", "application/json")
    assert updated.headers == {"Content-Type": "application/json"}


def test_with_body_rejects_unsupported_method():
    with pytest.raises(ConstructionError):
        Request(url="https://api.example.com").with_body({"x": 1}, "PUT")


def test_builders_do_not_share_headers_with_original():
    request = Request(url="https://api.example.com", headers={"Authorization": "Bearer t"})
    for updated in (
        request.with_query("a", "1"),
        request.with_method(HTTPMethod.GET),
        request.with_body({"x": 1}, HTTPMethod.POST),
    ):
        updated.headers["X-Trace"] = "1"
    assert request.headers == {"Authorization": "Bearer t"}


def test_with_body_rejects_self_referencing_body():
    body = {}
    body["self"] = body
    with pytest.raises(EncodingError, match="Circular reference"):
        Request(url="https://api.example.com").with_body(body, HTTPMethod.POST)
