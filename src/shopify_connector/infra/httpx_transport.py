"""Transporte HTTP concreto sobre httpx (síncrono).

Implementação de IO do HttpTransportProtocol: executa a troca HTTP e
devolve status, headers e corpo crus. Não retenta e não interpreta status.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from shopify_connector.protocols.transport import RawResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Transporte síncrono usando httpx.Client.

    Args:
        client: Cliente httpx já configurado. Se None, cria um próprio
            (e passa a ser responsável por fechá-lo).
        verify_ssl: Verificação TLS do cliente criado internamente.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        verify_ssl: bool = False,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(verify=verify_ssl)

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout_seconds: float = 120.0,
        connect_timeout_seconds: float = 120.0,
    ) -> RawResponse:
        """Executa a requisição e devolve a resposta crua.

        Raises:
            httpx.HTTPError: Falhas de rede/timeout (propagadas sem mudança).
        """
        timeout = httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds)
        try:
            response = self._client.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "shopify_transport_error",
                extra={"method": method, "error_type": type(exc).__name__},
            )
            raise

        encoding = response.headers.encoding
        raw_headers = [
            (name.decode(encoding), value.decode(encoding))
            for name, value in response.headers.raw
        ]
        return RawResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=raw_headers,
            body=response.content,
        )

    def close(self) -> None:
        """Fecha o cliente httpx se ele foi criado por este transporte."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
