"""Parsing de respostas da Shopify Admin API.

Extrai status, reason phrase e headers da resposta crua do transporte e
interpreta o header `Link` (paginação por cursor) em entradas tipadas.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .constants import CALL_LIMIT_HEADER, LINK_HEADER

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shopify_connector.protocols.transport import RawResponse

logger = logging.getLogger(__name__)

LinkEntry = dict[str, str]


@dataclass(frozen=True)
class ResponseMeta:
    """Metadados da última resposta: status, headers e links de paginação.

    Attributes:
        status_code: Status HTTP
        reason_phrase: Reason phrase HTTP
        headers: Nome (como recebido) -> valores unidos por ", "
        links: Entradas do header Link ({"url", "rel", ...})
    """

    status_code: int
    reason_phrase: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    links: list[LinkEntry] = field(default_factory=list)

    def has_header(self, name: str) -> bool:
        """Verifica presença do header (case-insensitive)."""
        return self._lookup(name) is not None

    def header(self, name: str, default: str = "") -> str:
        """Retorna valor do header (case-insensitive) ou default."""
        value = self._lookup(name)
        return default if value is None else value

    def _lookup(self, name: str) -> str | None:
        return lookup_header(self.headers, name)

    @property
    def call_limit(self) -> tuple[int, int] | None:
        """Quota (usadas, limite) do header de call limit, se parseável."""
        raw = self._lookup(CALL_LIMIT_HEADER)
        if not raw:
            return None
        used, sep, limit = raw.partition("/")
        if not sep:
            return None
        try:
            return int(used.strip()), int(limit.strip())
        except ValueError:
            return None

    def find_link(self, rel: str) -> LinkEntry | None:
        """Busca a entrada de link com o rel informado."""
        return find_link(self.links, rel)


def parse_headers(raw_headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Agrupa headers por nome, unindo valores repetidos com ", "."""
    grouped: dict[str, list[str]] = {}
    for name, value in raw_headers:
        grouped.setdefault(name, []).append(value)
    return {name: ", ".join(values) for name, values in grouped.items()}


def lookup_header(headers: Mapping[str, str], name: str) -> str | None:
    """Busca header por nome, exato primeiro e depois case-insensitive."""
    if name in headers:
        return headers[name]
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _split_outside(value: str, separator: str) -> list[str]:
    """Divide `value` em `separator` fora de aspas e de <...>."""
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    in_angle = False
    for char in value:
        if char == '"' and not in_angle:
            in_quotes = not in_quotes
        elif char == "<" and not in_quotes:
            in_angle = True
        elif char == ">" and not in_quotes:
            in_angle = False
        elif char == separator and not in_quotes and not in_angle:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def parse_link_header(value: str) -> list[LinkEntry]:
    """Interpreta um header Link no formato RFC 5988.

    Exemplo:
        '<https://x/products.json?page_info=abc>; rel="next"'
        -> [{"url": "https://x/products.json?page_info=abc", "rel": "next"}]

    Valores sem `<url>` são ignorados.
    """
    links: list[LinkEntry] = []
    if not value or not value.strip():
        return links

    for link_value in _split_outside(value, ","):
        segments = _split_outside(link_value, ";")
        target = segments[0].strip()
        if not (target.startswith("<") and target.endswith(">")):
            continue

        entry: LinkEntry = {"url": target[1:-1].strip()}
        for param in segments[1:]:
            key, sep, raw = param.partition("=")
            key = key.strip().lower()
            if not key:
                continue
            entry[key] = raw.strip().strip('"') if sep else ""
        links.append(entry)
    return links


def find_link(links: Iterable[LinkEntry], rel: str) -> LinkEntry | None:
    """Busca linear pela primeira entrada com `rel` igual ao informado."""
    for link in links:
        if link.get("rel") == rel:
            return link
    return None


def parse_response(raw: RawResponse) -> ResponseMeta:
    """Constrói ResponseMeta a partir da resposta crua do transporte."""
    headers = parse_headers(raw.headers)
    link_value = lookup_header(headers, LINK_HEADER)
    return ResponseMeta(
        status_code=raw.status_code,
        reason_phrase=raw.reason_phrase,
        headers=headers,
        links=parse_link_header(link_value) if link_value else [],
    )


def decode_body(body: bytes) -> Any:
    """Decodifica o corpo JSON; vazio ou inválido vira None."""
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.debug("shopify_body_not_json", extra={"body_size": len(body)})
        return None
