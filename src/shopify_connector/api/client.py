"""Fachada do conector Shopify.

Reúne credenciais, domínio da loja, headers persistentes, despacho genérico
de verbo/recurso, paginação, OAuth e validações HMAC sobre um único
ShopifyHttpClient.

Uso:
    client = create_shopify_client()
    client.set_shop_url("https://minha-loja.myshopify.com")
    products = client.get("admin/api/2024-04/products.json", {"limit": 50})
    next_page = client.get_next_page(products)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from shopify_connector.infra.httpx_transport import HttpxTransport

from .constants import ACCESS_TOKEN_HEADER, OAUTH_ACCESS_TOKEN_PATH
from .http_client import ShopifyHttpClient
from .oauth import build_authorize_url
from .pagination import PaginationNavigator
from .signature import verify_callback_query, verify_webhook_payload

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .http_client import ShopifyResponse
    from .rate_governor import RetryPolicy
    from .response import ResponseMeta

logger = logging.getLogger(__name__)

_DISALLOWED_PREFIXES = ("http://", "https://", "http//", "ftp://", "ftps://")


def remove_protocol(url: str) -> str:
    """Remove o primeiro prefixo de protocolo conhecido da URL."""
    for prefix in _DISALLOWED_PREFIXES:
        if url.startswith(prefix):
            return url[len(prefix):]
    return url


def normalize_shop_domain(shop_url: str) -> str:
    """Reduz a URL da loja ao host (ex: foo.myshopify.com)."""
    shop_url = shop_url.strip()
    host = urlsplit(shop_url).hostname
    return host if host else remove_protocol(shop_url)


class ShopifyClient:
    """Cliente da Shopify Admin API.

    Estado por instância: credenciais, domínio da loja e headers
    persistentes. Os metadados de cada resposta voltam no próprio
    ShopifyResponse; `last_response` espelha o da chamada mais recente.

    Args:
        http_client: Executor de requests. Se None, cria um
            ShopifyHttpClient sobre HttpxTransport com `policy`.
        api_key: Client ID do app
        api_secret: Client secret do app
        access_token: Token de acesso da loja
        shop_url: URL/domínio da loja
        policy: Política de throttling do executor criado internamente

    Raises:
        ValueError: `policy` junto com um `http_client` já montado
    """

    def __init__(
        self,
        http_client: ShopifyHttpClient | None = None,
        *,
        api_key: str = "",
        api_secret: str = "",
        access_token: str = "",
        shop_url: str | None = None,
        policy: RetryPolicy | None = None,
    ) -> None:
        if http_client is None:
            http_client = ShopifyHttpClient(HttpxTransport(), policy)
        elif policy is not None:
            raise ValueError("policy só se aplica ao executor criado internamente")
        self._http = http_client
        self._api_key = api_key
        self._api_secret = api_secret
        self._access_token = access_token
        self._shop_domain = ""
        self._request_headers: dict[str, str] = {}
        self._navigator = PaginationNavigator(http_client, self._auth_headers)
        if shop_url:
            self.set_shop_url(shop_url)

    @property
    def http_client(self) -> ShopifyHttpClient:
        return self._http

    # Credenciais e loja

    def set_key(self, api_key: str) -> ShopifyClient:
        self._api_key = api_key
        return self

    def set_secret(self, api_secret: str) -> ShopifyClient:
        self._api_secret = api_secret
        return self

    def set_access_token(self, access_token: str) -> ShopifyClient:
        self._access_token = access_token
        return self

    def set_shop_url(self, shop_url: str) -> ShopifyClient:
        """Define a loja; aceita URL com ou sem protocolo."""
        self._shop_domain = normalize_shop_domain(shop_url)
        return self

    @property
    def shop_domain(self) -> str:
        return self._shop_domain

    @property
    def base_url(self) -> str:
        return f"https://{self._shop_domain}/"

    def resolve_url(self, uri: str) -> str:
        """Resolve `uri` contra a URL base da loja, salvo se já absoluta."""
        uri = uri.lstrip("/")
        if uri.startswith("http"):
            return uri
        return self.base_url + uri

    # Headers persistentes

    def add_header(self, key: str, value: str) -> ShopifyClient:
        """Adiciona header enviado em todas as chamadas seguintes."""
        self._request_headers[key] = value
        return self

    def remove_headers(self) -> ShopifyClient:
        self._request_headers = {}
        return self

    def _auth_headers(self) -> dict[str, str]:
        return {ACCESS_TOKEN_HEADER: self._access_token, **self._request_headers}

    # OAuth

    def get_authorize_url(
        self,
        scope: str | Iterable[str] = "",
        redirect_url: str = "",
        nonce: str = "",
    ) -> str:
        return build_authorize_url(self._shop_domain, self._api_key, scope, redirect_url, nonce)

    def get_access_token(self, code: str) -> Any:
        """Troca o authorization code pelo access token.

        Returns:
            Payload desembrulhado (o próprio token) ou "" se vazio.
        """
        payload = {
            "client_id": self._api_key,
            "client_secret": self._api_secret,
            "code": code,
        }
        response = self._http.execute(
            "POST",
            self.resolve_url(OAUTH_ACCESS_TOKEN_PATH),
            payload,
            dict(self._request_headers),
        )
        logger.info("shopify_access_token_exchanged", extra={"shop": self._shop_domain})
        return response.data if response.data is not None else ""

    # Despacho genérico

    def call(
        self,
        verb: str,
        resource: str,
        payload: dict[str, Any] | None = None,
    ) -> ShopifyResponse:
        """Executa `verb` sobre `resource` (ex: "get", "admin/products.json").

        Args:
            verb: Verbo HTTP
            resource: Caminho relativo à loja ou URL absoluta
            payload: Query (GET/DELETE) ou corpo JSON

        Raises:
            ShopifyNotFoundError: Status 404
            ShopifyApiError: Demais falhas
        """
        return self._http.execute(
            verb,
            self.resolve_url(resource),
            payload,
            self._auth_headers(),
        )

    def get(self, resource: str, params: dict[str, Any] | None = None) -> ShopifyResponse:
        return self.call("GET", resource, params)

    def post(self, resource: str, data: dict[str, Any] | None = None) -> ShopifyResponse:
        return self.call("POST", resource, data)

    def put(self, resource: str, data: dict[str, Any] | None = None) -> ShopifyResponse:
        return self.call("PUT", resource, data)

    def delete(self, resource: str, params: dict[str, Any] | None = None) -> ShopifyResponse:
        return self.call("DELETE", resource, params)

    # Paginação

    def get_next_page(self, response: ShopifyResponse | None = None) -> ShopifyResponse | None:
        """Próxima página, ou None se não houver link rel="next"."""
        return self._navigator.get_next_page(response)

    def get_previous_page(
        self,
        response: ShopifyResponse | None = None,
    ) -> ShopifyResponse | None:
        """Página anterior, ou None se não houver link rel="previous"."""
        return self._navigator.get_previous_page(response)

    # Validações HMAC

    def verify_request(self, query: str | Mapping[str, object]) -> bool:
        """Valida o hmac do callback de autorização."""
        return verify_callback_query(query, self._api_secret)

    def verify_webhook(self, data: bytes | str, hmac_header: str) -> bool:
        """Valida o header X-Shopify-Hmac-Sha256 de um webhook."""
        return verify_webhook_payload(data, hmac_header, self._api_secret)

    # Última resposta

    @property
    def last_response(self) -> ResponseMeta | None:
        return self._http.last_response

    def get_status_code(self) -> int | None:
        meta = self.last_response
        return meta.status_code if meta else None

    def get_reason_phrase(self) -> str | None:
        meta = self.last_response
        return meta.reason_phrase if meta else None

    def get_headers(self) -> dict[str, str]:
        meta = self.last_response
        return dict(meta.headers) if meta else {}

    def get_header(self, name: str) -> str:
        meta = self.last_response
        return meta.header(name) if meta else ""

    def has_header(self, name: str) -> bool:
        meta = self.last_response
        return meta.has_header(name) if meta else False
