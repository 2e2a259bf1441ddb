"""Erros e classificação de respostas da Shopify Admin API."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .constants import NOT_FOUND_STATUS, THROTTLED_STATUS

if TYPE_CHECKING:
    from .response import ResponseMeta


class ShopifyApiError(Exception):
    """Erro retornado pela API (status >= 400 ou campo `errors` no corpo).

    Attributes:
        message: Mensagem crua ou lista de erros em JSON
        status_code: Status HTTP da resposta
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ShopifyNotFoundError(ShopifyApiError):
    """Recurso inexistente (HTTP 404)."""


class ShopifyThrottledError(ShopifyApiError):
    """Throttling (HTTP 429) persistiu após esgotar as retentativas."""


def error_message_from_body(body: Any, reason_phrase: str) -> str:
    """Extrai a mensagem de erro do corpo ou usa a reason phrase.

    Listas e objetos em `errors` são serializados em JSON.
    """
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors is None:
        return reason_phrase
    if isinstance(errors, (list, dict)):
        return json.dumps(errors, separators=(",", ":"))
    return str(errors)


def raise_for_response(meta: ResponseMeta, body: Any) -> None:
    """Levanta o erro tipado se a resposta representa falha.

    Falha = campo `errors` no corpo (mesmo em 2xx) ou status >= 400.

    Raises:
        ShopifyNotFoundError: Status 404
        ShopifyThrottledError: Status 429
        ShopifyApiError: Demais falhas
    """
    has_errors = isinstance(body, dict) and body.get("errors") is not None
    if not has_errors and meta.status_code < 400:
        return

    message = error_message_from_body(body, meta.reason_phrase)
    if meta.status_code == NOT_FOUND_STATUS:
        raise ShopifyNotFoundError(message, meta.status_code)
    if meta.status_code == THROTTLED_STATUS:
        raise ShopifyThrottledError(message, meta.status_code)
    raise ShopifyApiError(message, meta.status_code)
