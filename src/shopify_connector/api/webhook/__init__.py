"""Webhook Shopify: assinatura HMAC e parsing seguro."""

from ..signature import SignatureResult, verify_shopify_signature
from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookEnvelope,
    WebhookRequestError,
    parse_webhook_envelope,
    parse_webhook_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookEnvelope",
    "WebhookRequestError",
    "parse_webhook_envelope",
    "parse_webhook_request",
    "verify_shopify_signature",
]
