"""Testes da fachada ShopifyClient."""

from __future__ import annotations

import base64
import hashlib
import hmac

import pytest

from shopify_connector.api.client import ShopifyClient, normalize_shop_domain, remove_protocol
from shopify_connector.api.errors import ShopifyNotFoundError
from shopify_connector.api.http_client import ShopifyHttpClient
from shopify_connector.api.rate_governor import RetryPolicy
from tests.fakes.fake_transport import FakeTransport, make_response


@pytest.fixture
def client(http_client: ShopifyHttpClient) -> ShopifyClient:
    return ShopifyClient(
        http_client,
        api_key="key",
        api_secret="secret",
        access_token="tok",
        shop_url="https://foo.myshopify.com",
    )


class TestConstruction:
    def test_builds_default_executor_with_policy(self) -> None:
        policy = RetryPolicy(max_retries=2)

        client = ShopifyClient(api_key="key", shop_url="foo.myshopify.com", policy=policy)

        assert isinstance(client.http_client, ShopifyHttpClient)
        assert client.http_client.policy is policy
        assert client.last_response is None

    def test_builds_default_executor_without_policy(self) -> None:
        client = ShopifyClient()

        assert client.http_client.policy == RetryPolicy()

    def test_policy_with_explicit_executor_is_rejected(
        self, http_client: ShopifyHttpClient
    ) -> None:
        with pytest.raises(ValueError, match="policy"):
            ShopifyClient(http_client, policy=RetryPolicy())

    def test_explicit_executor_is_used(self, http_client: ShopifyHttpClient) -> None:
        assert ShopifyClient(http_client).http_client is http_client


class TestShopUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://foo.myshopify.com",
            "http://foo.myshopify.com/",
            "foo.myshopify.com",
            "http//foo.myshopify.com",
            " https://foo.myshopify.com/admin ",
        ],
    )
    def test_set_shop_url_normalizes_to_host(self, client: ShopifyClient, url: str) -> None:
        client.set_shop_url(url)

        assert client.shop_domain == "foo.myshopify.com"
        assert client.base_url == "https://foo.myshopify.com/"

    def test_set_shop_url_replaces_previous_shop(self, client: ShopifyClient) -> None:
        client.set_shop_url("bar.myshopify.com")

        assert client.shop_domain == "bar.myshopify.com"

    def test_remove_protocol(self) -> None:
        assert remove_protocol("ftps://x.com") == "x.com"
        assert remove_protocol("x.com") == "x.com"
        assert normalize_shop_domain("ftp://x.com") == "x.com"

    def test_resolve_url(self, client: ShopifyClient) -> None:
        assert client.resolve_url("/admin/shop.json") == "https://foo.myshopify.com/admin/shop.json"
        assert client.resolve_url("https://other/x.json") == "https://other/x.json"


class TestDispatch:
    def test_call_sends_access_token_and_persistent_headers(
        self, client: ShopifyClient, transport: FakeTransport
    ) -> None:
        transport.queue(make_response(200, {"products": [{"id": 1}]}), make_response(200, {}))
        client.add_header("X-Request-Source", "tests")

        response = client.call("get", "/admin/products.json", {"limit": 1})
        client.get("admin/shop.json")

        assert response.data == [{"id": 1}]
        sent = transport.sent[0]
        assert sent.url == "https://foo.myshopify.com/admin/products.json"
        assert sent.params == {"limit": 1}
        assert sent.headers == {"X-Shopify-Access-Token": "tok", "X-Request-Source": "tests"}
        assert transport.sent[1].headers["X-Request-Source"] == "tests"

    def test_remove_headers_clears_persistent_headers(
        self, client: ShopifyClient, transport: FakeTransport
    ) -> None:
        transport.queue(make_response(200, {}))

        client.add_header("X-A", "1").remove_headers()
        client.delete("admin/products/1.json")

        assert transport.sent[0].headers == {"X-Shopify-Access-Token": "tok"}
        assert transport.sent[0].method == "DELETE"

    def test_post_and_put_send_json_body(
        self, client: ShopifyClient, transport: FakeTransport
    ) -> None:
        transport.queue(make_response(201, {"product": {"id": 5}}), make_response(200, {"product": {"id": 5}}))

        created = client.post("admin/products.json", {"product": {"title": "Mug"}})
        client.set_access_token("tok2").put("admin/products/5.json", {"product": {"title": "Cup"}})

        assert created.data == {"id": 5}
        assert transport.sent[0].json == {"product": {"title": "Mug"}}
        assert transport.sent[1].method == "PUT"
        assert transport.sent[1].headers["X-Shopify-Access-Token"] == "tok2"

    def test_not_found_propagates(self, client: ShopifyClient, transport: FakeTransport) -> None:
        transport.queue(make_response(404, {"errors": "Not Found"}, reason_phrase="Not Found"))

        with pytest.raises(ShopifyNotFoundError):
            client.get("admin/products/999.json")

        assert client.get_status_code() == 404
        assert client.get_reason_phrase() == "Not Found"


class TestOAuth:
    def test_get_authorize_url(self, client: ShopifyClient) -> None:
        url = client.get_authorize_url(["read_products", "write_orders"], "https://app/cb", "n1")

        assert url == (
            "https://foo.myshopify.com/admin/oauth/authorize?client_id=key"
            "&scope=read_products%2Cwrite_orders"
            "&redirect_uri=https%3A%2F%2Fapp%2Fcb&state=n1"
        )

    def test_get_authorize_url_without_optional_parts(self, client: ShopifyClient) -> None:
        assert client.get_authorize_url("read_products") == (
            "https://foo.myshopify.com/admin/oauth/authorize?client_id=key&scope=read_products"
        )

    def test_get_access_token_exchanges_code(
        self, client: ShopifyClient, transport: FakeTransport
    ) -> None:
        transport.queue(make_response(200, {"access_token": "shpat_1", "scope": "read_products"}))

        token = client.get_access_token("the-code")

        assert token == "shpat_1"
        sent = transport.sent[0]
        assert sent.method == "POST"
        assert sent.url == "https://foo.myshopify.com/admin/oauth/access_token"
        assert sent.json == {"client_id": "key", "client_secret": "secret", "code": "the-code"}
        assert "X-Shopify-Access-Token" not in sent.headers

    def test_get_access_token_empty_body_returns_empty_string(
        self, client: ShopifyClient, transport: FakeTransport
    ) -> None:
        transport.queue(make_response(200, None))

        assert client.get_access_token("c") == ""


class TestPaginationAndState:
    def test_next_page_through_client(self, client: ShopifyClient, transport: FakeTransport) -> None:
        link = '<https://foo.myshopify.com/admin/products.json?page_info=abc>; rel="next"'
        transport.queue(
            make_response(200, {"products": [1]}, [("Link", link)]),
            make_response(200, {"products": [2]}),
        )

        first = client.get("admin/products.json")
        second = client.get_next_page()

        assert second is not None
        assert second.data == [2]
        assert transport.sent[1].url == "https://foo.myshopify.com/admin/products.json"
        assert transport.sent[1].params == {"page_info": "abc"}
        assert client.get_previous_page(first) is None

    def test_last_response_getters(self, client: ShopifyClient, transport: FakeTransport) -> None:
        assert client.get_status_code() is None
        assert client.get_headers() == {}
        transport.queue(make_response(200, {}, [("X-Request-Id", "r-1")], "OK"))

        client.get("admin/shop.json")

        assert client.get_status_code() == 200
        assert client.get_headers() == {"X-Request-Id": "r-1"}
        assert client.has_header("x-request-id")
        assert client.get_header("X-Request-Id") == "r-1"
        assert client.get_header("Missing") == ""


class TestVerification:
    def test_verify_request_uses_client_secret(self, client: ShopifyClient) -> None:
        digest = hmac.new(b"secret", b"code=y&shop=x", hashlib.sha256).hexdigest()

        assert client.verify_request(f"shop=x&code=y&hmac={digest}") is True
        assert client.set_secret("other").verify_request(f"shop=x&code=y&hmac={digest}") is False

    def test_verify_webhook(self, client: ShopifyClient) -> None:
        body = b'{"id": 1}'
        header = base64.b64encode(hmac.new(b"secret", body, hashlib.sha256).digest()).decode()

        assert client.verify_webhook(body, header) is True
        assert client.verify_webhook(body + b" ", header) is False
