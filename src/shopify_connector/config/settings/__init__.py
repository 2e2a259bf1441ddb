"""Agregador de settings do conector."""

from __future__ import annotations

from shopify_connector.config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from shopify_connector.config.settings.shopify import (
    ShopifySettings,
    get_shopify_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "ShopifySettings",
    "get_base_settings",
    "get_shopify_settings",
]
