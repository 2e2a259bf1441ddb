"""Navegação por páginas via header Link (cursor page_info)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from .response import find_link

if TYPE_CHECKING:
    from collections.abc import Callable

    from .http_client import ShopifyHttpClient, ShopifyResponse

logger = logging.getLogger(__name__)

NEXT_REL = "next"
PREVIOUS_REL = "previous"


def split_link_url(url: str) -> tuple[str, dict[str, Any]]:
    """Separa a URL do link em URL base e parâmetros de query."""
    parts = urlsplit(url)
    base = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return base, dict(parse_qsl(parts.query, keep_blank_values=True))


class PaginationNavigator:
    """Reemite GETs para as páginas adjacentes anunciadas no header Link.

    Args:
        executor: Executor de requests
        headers_factory: Retorna os headers autenticados a cada chamada
    """

    def __init__(
        self,
        executor: ShopifyHttpClient,
        headers_factory: Callable[[], dict[str, str]],
    ) -> None:
        self._executor = executor
        self._headers_factory = headers_factory

    def get_page(
        self,
        rel: str,
        response: ShopifyResponse | None = None,
    ) -> ShopifyResponse | None:
        """Busca a página do `rel` informado.

        Args:
            rel: Relação do link ("next" ou "previous")
            response: Resposta de referência. Se None, usa a última
                resposta do executor.

        Returns:
            ShopifyResponse da página, ou None se não há link para `rel`
            (nenhuma requisição é feita nesse caso).
        """
        if response is not None:
            links = response.links
        elif self._executor.last_response is not None:
            links = self._executor.last_response.links
        else:
            links = []

        link = find_link(links, rel)
        if link is None:
            logger.debug("shopify_page_absent", extra={"rel": rel})
            return None

        url, params = split_link_url(link["url"])
        return self._executor.execute("GET", url, params, self._headers_factory())

    def get_next_page(self, response: ShopifyResponse | None = None) -> ShopifyResponse | None:
        return self.get_page(NEXT_REL, response)

    def get_previous_page(
        self,
        response: ShopifyResponse | None = None,
    ) -> ShopifyResponse | None:
        return self.get_page(PREVIOUS_REL, response)
