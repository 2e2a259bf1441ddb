"""shopify_connector: cliente da Shopify Admin API.

Uso:
    from shopify_connector import create_shopify_client

    client = create_shopify_client()
    orders = client.get("admin/api/2024-04/orders.json", {"status": "any"})
"""

from shopify_connector.api import (
    ShopifyApiError,
    ShopifyClient,
    ShopifyHttpClient,
    ShopifyNotFoundError,
    ShopifyResponse,
    ShopifyThrottledError,
)
from shopify_connector.bootstrap import configure_from_env, create_shopify_client

__all__ = [
    "ShopifyApiError",
    "ShopifyClient",
    "ShopifyHttpClient",
    "ShopifyNotFoundError",
    "ShopifyResponse",
    "ShopifyThrottledError",
    "configure_from_env",
    "create_shopify_client",
]
