"""Executor de requests para a Shopify Admin API.

Transforma uma chamada lógica em uma troca HTTP:
- Escolhe a codificação do payload (query para GET/DELETE, JSON nos demais)
- Pausa preventiva quando a quota do call limit está baixa
- Reenvia a mesma requisição em 429, respeitando Retry-After e a RetryPolicy
- Classifica sucesso/erro e desembrulha a chave única do topo do corpo
- Devolve ShopifyResponse com payload, status, headers e links de paginação

Logging estruturado sem tokens nem payloads da loja.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from .constants import QUERY_METHODS
from .errors import ShopifyApiError, raise_for_response
from .rate_governor import RateGovernor, RetryPolicy
from .response import LinkEntry, ResponseMeta, decode_body, parse_response

if TYPE_CHECKING:
    from collections.abc import Callable

    from shopify_connector.protocols.transport import HttpTransportProtocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class ShopifyResponse:
    """Resultado de uma chamada bem-sucedida.

    Attributes:
        data: Payload desembrulhado (valor da chave única do topo)
        meta: Status, headers e links da resposta
        body: Corpo JSON decodificado, sem desembrulhar
    """

    data: Any
    meta: ResponseMeta
    body: Any = None

    @property
    def status_code(self) -> int:
        return self.meta.status_code

    @property
    def headers(self) -> dict[str, str]:
        return self.meta.headers

    @property
    def links(self) -> list[LinkEntry]:
        return self.meta.links

    @property
    def next_link(self) -> LinkEntry | None:
        return self.meta.find_link("next")

    @property
    def previous_link(self) -> LinkEntry | None:
        return self.meta.find_link("previous")


def unwrap_payload(body: Any) -> Any:
    """Retorna o valor da primeira chave de um objeto não vazio.

    A Shopify embrulha recursos e listas em uma chave (ex: {"product": {...}}).
    Corpos vazios ou que não são objetos são devolvidos como estão.
    """
    if isinstance(body, dict) and body:
        return next(iter(body.values()))
    return body


class ShopifyHttpClient:
    """Executor de chamadas com throttling e classificação de erros.

    Um lock serializa `execute`, mantendo consistente o estado da última
    resposta (usado pela pausa preventiva e pela paginação) quando a
    mesma instância é compartilhada entre threads.

    Args:
        transport: Transporte HTTP (ex: HttpxTransport)
        policy: Política de throttling/retentativa
        timeout_seconds: Timeout total por requisição
        connect_timeout_seconds: Timeout de conexão
        sleep: Função de espera (injetável para testes)
    """

    def __init__(
        self,
        transport: HttpTransportProtocol,
        policy: RetryPolicy | None = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        connect_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._transport = transport
        self._governor = RateGovernor(policy, sleep=sleep)
        self._timeout_seconds = timeout_seconds
        self._connect_timeout_seconds = connect_timeout_seconds
        self._lock = threading.Lock()
        self._last_response: ResponseMeta | None = None

    @property
    def policy(self) -> RetryPolicy:
        return self._governor.policy

    @property
    def last_response(self) -> ResponseMeta | None:
        """Metadados da resposta mais recente (None antes da primeira)."""
        return self._last_response

    def execute(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ShopifyResponse:
        """Executa uma chamada lógica à API.

        Args:
            method: Verbo HTTP (case-insensitive)
            url: URL absoluta
            payload: Query (GET/DELETE) ou corpo JSON (demais verbos)
            headers: Headers a enviar

        Returns:
            ShopifyResponse com o payload desembrulhado

        Raises:
            ShopifyNotFoundError: Status 404
            ShopifyThrottledError: 429 após esgotar as retentativas
            ShopifyApiError: Status >= 400 ou `errors` no corpo
        """
        verb = method.upper()
        payload = payload or {}
        if verb in QUERY_METHODS:
            params, json_body = payload, None
        else:
            params, json_body = None, payload

        with self._lock:
            self._governor.cool_down(self._last_response)

            attempt = 0
            while True:
                meta, body = self._send(verb, url, headers or {}, params, json_body)
                if not self._governor.should_retry(meta, attempt):
                    break
                attempt += 1

        try:
            raise_for_response(meta, body)
        except ShopifyApiError as exc:
            logger.warning(
                "shopify_api_error",
                extra={
                    "method": verb,
                    "path": urlsplit(url).path,
                    "status_code": exc.status_code,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        logger.debug(
            "shopify_request_ok",
            extra={
                "method": verb,
                "path": urlsplit(url).path,
                "status_code": meta.status_code,
                "retries": attempt,
            },
        )
        return ShopifyResponse(data=unwrap_payload(body), meta=meta, body=body)

    def _send(
        self,
        verb: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None,
        json_body: dict[str, Any] | None,
    ) -> tuple[ResponseMeta, Any]:
        logger.debug("shopify_request", extra={"method": verb, "path": urlsplit(url).path})
        raw = self._transport.send(
            verb,
            url,
            headers=headers,
            params=params,
            json=json_body,
            timeout_seconds=self._timeout_seconds,
            connect_timeout_seconds=self._connect_timeout_seconds,
        )
        meta = parse_response(raw)
        self._last_response = meta
        return meta, decode_body(raw.body)
