"""Composição do conector a partir das settings de ambiente."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shopify_connector.api.client import ShopifyClient
from shopify_connector.api.http_client import ShopifyHttpClient
from shopify_connector.config.logging import configure_logging
from shopify_connector.config.settings import get_base_settings, get_shopify_settings
from shopify_connector.infra.httpx_transport import HttpxTransport
from shopify_connector.observability import get_correlation_id

if TYPE_CHECKING:
    from shopify_connector.config.settings import BaseSettings, ShopifySettings
    from shopify_connector.protocols.transport import HttpTransportProtocol

logger = logging.getLogger(__name__)


def configure_from_env(settings: BaseSettings | None = None) -> None:
    """Configura logging JSON com as BaseSettings e o correlation_id do contexto."""
    base = settings or get_base_settings()
    errors = base.validate()
    if errors:
        raise ValueError("; ".join(errors))
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def create_shopify_client(
    settings: ShopifySettings | None = None,
    transport: HttpTransportProtocol | None = None,
) -> ShopifyClient:
    """Factory do ShopifyClient com config padrão.

    Args:
        settings: ShopifySettings opcional. Se None, carrega do ambiente.
        transport: Transporte opcional. Se None, usa HttpxTransport.

    Returns:
        Cliente configurado com credenciais, loja e política de throttling.
    """
    shopify = settings or get_shopify_settings()
    for problem in shopify.validate():
        logger.warning("shopify_settings_invalid", extra={"problem": problem})

    http_client = ShopifyHttpClient(
        transport or HttpxTransport(verify_ssl=shopify.verify_ssl),
        shopify.retry_policy(),
        timeout_seconds=shopify.request_timeout_seconds,
        connect_timeout_seconds=shopify.connect_timeout_seconds,
    )
    return ShopifyClient(
        http_client,
        api_key=shopify.api_key,
        api_secret=shopify.api_secret,
        access_token=shopify.access_token,
        shop_url=shopify.shop_url or None,
    )
