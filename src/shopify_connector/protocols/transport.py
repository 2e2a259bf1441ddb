"""Contrato do transporte HTTP usado pelo executor de requests.

Evita dependência direta do executor com a biblioteca HTTP concreta.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class RawResponse:
    """Resposta crua do transporte, sem interpretação semântica.

    Attributes:
        status_code: Status HTTP
        reason_phrase: Reason phrase HTTP (ex: "Not Found")
        headers: Pares (nome, valor) como recebidos; nomes podem repetir
        body: Corpo bruto
    """

    status_code: int
    reason_phrase: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


class HttpTransportProtocol(Protocol):
    """Contrato mínimo do transporte.

    O transporte nunca retenta e nunca levanta erro por status HTTP;
    falhas de rede propagam para o chamador. Verificação TLS é
    configuração do transporte, não da chamada.
    """

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
    ) -> RawResponse: ...
