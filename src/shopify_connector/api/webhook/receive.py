"""Parse e validação inicial de webhooks da Shopify (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import WEBHOOK_SHOP_DOMAIN_HEADER, WEBHOOK_TOPIC_HEADER
from ..response import lookup_header
from ..signature import SignatureResult, verify_shopify_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


@dataclass(frozen=True)
class WebhookEnvelope:
    """Webhook validado com o tópico e a loja de origem."""

    topic: str
    shop_domain: str
    payload: dict[str, object] = field(default_factory=dict)


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> tuple[dict[str, object], SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: Client secret do app

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_shopify_signature(raw_body, headers, secret)
    if not signature_result.valid:
        reason = signature_result.error or "invalid_signature"
        raise InvalidSignatureError(reason)

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result


def parse_webhook_envelope(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> WebhookEnvelope:
    """Como parse_webhook_request, incluindo tópico e domínio da loja."""
    payload, _ = parse_webhook_request(raw_body, headers, secret)
    return WebhookEnvelope(
        topic=lookup_header(headers, WEBHOOK_TOPIC_HEADER) or "",
        shop_domain=lookup_header(headers, WEBHOOK_SHOP_DOMAIN_HEADER) or "",
        payload=payload,
    )
