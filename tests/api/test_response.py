"""Testes do parsing de respostas e do header Link."""

from __future__ import annotations

from shopify_connector.api.response import (
    ResponseMeta,
    decode_body,
    find_link,
    parse_headers,
    parse_link_header,
    parse_response,
)
from shopify_connector.protocols.transport import RawResponse


def test_parse_headers_joins_repeated_values_keeping_case() -> None:
    headers = parse_headers(
        [("Set-Cookie", "a=1"), ("X-Request-Id", "r1"), ("Set-Cookie", "b=2")]
    )

    assert headers == {"Set-Cookie": "a=1, b=2", "X-Request-Id": "r1"}


def test_parse_link_header_next_and_previous() -> None:
    value = (
        '<https://x.myshopify.com/admin/api/2024-04/products.json?limit=2&page_info=prev1>; rel="previous", '
        '<https://x.myshopify.com/admin/api/2024-04/products.json?limit=2&page_info=next1>; rel="next"'
    )

    links = parse_link_header(value)

    assert links == [
        {
            "url": "https://x.myshopify.com/admin/api/2024-04/products.json?limit=2&page_info=prev1",
            "rel": "previous",
        },
        {
            "url": "https://x.myshopify.com/admin/api/2024-04/products.json?limit=2&page_info=next1",
            "rel": "next",
        },
    ]


def test_parse_link_header_keeps_extra_params_and_unquoted_values() -> None:
    links = parse_link_header('<https://x/a?b=1,2>; rel=next; title="Page, two"')

    assert links == [{"url": "https://x/a?b=1,2", "rel": "next", "title": "Page, two"}]


def test_parse_link_header_ignores_values_without_url() -> None:
    assert parse_link_header('rel="next"') == []
    assert parse_link_header("") == []


def test_find_link_returns_none_when_absent() -> None:
    links = parse_link_header('<https://x/a>; rel="previous"')

    assert find_link(links, "previous") == {"url": "https://x/a", "rel": "previous"}
    assert find_link(links, "next") is None


def test_parse_response_builds_meta_with_links() -> None:
    raw = RawResponse(
        status_code=200,
        reason_phrase="OK",
        headers=[
            ("link", '<https://x/products.json?page_info=abc>; rel="next"'),
            ("X-Shopify-Shop-Api-Call-Limit", "1/40"),
        ],
        body=b"{}",
    )

    meta = parse_response(raw)

    assert meta.status_code == 200
    assert meta.reason_phrase == "OK"
    assert meta.find_link("next") == {"url": "https://x/products.json?page_info=abc", "rel": "next"}
    assert meta.call_limit == (1, 40)


def test_parse_response_without_link_has_no_links() -> None:
    meta = parse_response(RawResponse(status_code=204))

    assert meta.links == []
    assert meta.call_limit is None


def test_header_lookup_is_case_insensitive() -> None:
    meta = ResponseMeta(status_code=200, headers={"Retry-After": "2"})

    assert meta.has_header("retry-after")
    assert meta.header("RETRY-AFTER") == "2"
    assert meta.header("Link") == ""
    assert meta.header("Link", default="-") == "-"


def test_call_limit_unparsable_is_none() -> None:
    meta = ResponseMeta(status_code=200, headers={"X-Shopify-Shop-Api-Call-Limit": "lots"})

    assert meta.call_limit is None


def test_decode_body() -> None:
    assert decode_body(b'{"a": 1}') == {"a": 1}
    assert decode_body(b"") is None
    assert decode_body(b"   ") is None
    assert decode_body(b"not json") is None
