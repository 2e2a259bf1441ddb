"""Validação HMAC-SHA256 de callbacks OAuth e de webhooks da Shopify.

Dois esquemas independentes, ambos com o client secret do app:
- Callback: hex digest sobre a query string canônica (ordenada, sem
  `hmac`/`signature`), comparado com o parâmetro `hmac`.
- Webhook: base64 do digest binário sobre o corpo bruto, comparado com o
  header X-Shopify-Hmac-Sha256.

Toda comparação é em tempo constante (hmac.compare_digest).
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import unquote_plus

from .constants import WEBHOOK_HMAC_HEADER
from .response import lookup_header

if TYPE_CHECKING:
    from collections.abc import Mapping

# Parâmetros que não entram na mensagem assinada
_EXCLUDED_PARAMS = ("hmac", "signature")

_KEY_ESCAPES = str.maketrans({"&": "%26", "%": "%25", "=": "%3D"})
_VALUE_ESCAPES = str.maketrans({"&": "%26", "%": "%25"})


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da validação de assinatura de webhook."""

    valid: bool
    error: str | None = None


def parse_query_string(query: str) -> dict[str, str]:
    """Converte a query string crua em dict.

    Valores são decodificados (percent/plus); chaves ficam como recebidas.
    Pares sem `=` recebem valor vazio.
    """
    data: dict[str, str] = {}
    for pair in query.lstrip("?").split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        data[key] = unquote_plus(value)
    return data


def canonical_query(params: Mapping[str, object]) -> str:
    """Monta a mensagem assinada do callback.

    Remove `hmac` e `signature`, ordena as chaves e escapa apenas
    `&`, `%` e `=` (este último só nas chaves).
    """
    pairs = []
    for key in sorted(k for k in params if k not in _EXCLUDED_PARAMS):
        value = str(params[key])
        pairs.append(f"{key.translate(_KEY_ESCAPES)}={value.translate(_VALUE_ESCAPES)}")
    return "&".join(pairs)


def compute_callback_hmac(params: Mapping[str, object], secret: str) -> str:
    """Hex digest HMAC-SHA256 da query canônica."""
    message = canonical_query(params).encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_callback_query(query: str | Mapping[str, object], secret: str) -> bool:
    """Valida o `hmac` de um callback de autorização.

    Args:
        query: Query string crua ou dict já parseado
        secret: Client secret do app

    Returns:
        True se o hmac recebido confere
    """
    params = parse_query_string(query) if isinstance(query, str) else dict(query)
    received = str(params.get("hmac", ""))
    if not received or not secret:
        return False
    expected = compute_callback_hmac(params, secret)
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("ascii"))


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def compute_webhook_hmac(payload: bytes | str, secret: str) -> str:
    """Base64 do digest binário HMAC-SHA256 do corpo."""
    digest = hmac.new(secret.encode("utf-8"), _as_bytes(payload), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_webhook_payload(payload: bytes | str, hmac_header: str, secret: str) -> bool:
    """Valida o header HMAC de um webhook contra o corpo bruto.

    Args:
        payload: Corpo bruto do request
        hmac_header: Valor de X-Shopify-Hmac-Sha256
        secret: Client secret do app

    Returns:
        True se a assinatura confere
    """
    if not hmac_header or not secret:
        return False
    expected = compute_webhook_hmac(payload, secret)
    return hmac.compare_digest(hmac_header.strip().encode("utf-8"), expected.encode("ascii"))


def verify_shopify_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida a assinatura de webhook a partir dos headers recebidos."""
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    signature = lookup_header(headers, WEBHOOK_HMAC_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not verify_webhook_payload(raw_body, signature, secret):
        return SignatureResult(valid=False, error="invalid_signature")

    return SignatureResult(valid=True)
