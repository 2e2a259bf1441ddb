"""Conector Shopify Admin API: executor, paginação, OAuth e HMAC.

Responsabilidades:
- Executor de requests com throttling (call limit + 429)
- Parsing de status, headers e header Link
- Erros tipados (404 vs demais)
- Validação HMAC de callbacks e webhooks
"""

from .client import ShopifyClient, normalize_shop_domain, remove_protocol
from .errors import ShopifyApiError, ShopifyNotFoundError, ShopifyThrottledError
from .http_client import ShopifyHttpClient, ShopifyResponse, unwrap_payload
from .pagination import PaginationNavigator
from .rate_governor import RateGovernor, RetryPolicy
from .response import ResponseMeta, parse_link_header, parse_response
from .signature import (
    SignatureResult,
    verify_callback_query,
    verify_shopify_signature,
    verify_webhook_payload,
)

__all__ = [
    "PaginationNavigator",
    "RateGovernor",
    "ResponseMeta",
    "RetryPolicy",
    "ShopifyApiError",
    "ShopifyClient",
    "ShopifyHttpClient",
    "ShopifyNotFoundError",
    "ShopifyResponse",
    "ShopifyThrottledError",
    "SignatureResult",
    "normalize_shop_domain",
    "parse_link_header",
    "parse_response",
    "remove_protocol",
    "unwrap_payload",
    "verify_callback_query",
    "verify_shopify_signature",
    "verify_webhook_payload",
]
