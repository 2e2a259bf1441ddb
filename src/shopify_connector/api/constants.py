"""Constantes da Shopify Admin API usadas pelo conector."""

from __future__ import annotations

# Headers de request
ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"

# Headers de response
CALL_LIMIT_HEADER = "X-Shopify-Shop-Api-Call-Limit"
RETRY_AFTER_HEADER = "Retry-After"
LINK_HEADER = "Link"

# Headers de webhook
WEBHOOK_HMAC_HEADER = "X-Shopify-Hmac-Sha256"
WEBHOOK_TOPIC_HEADER = "X-Shopify-Topic"
WEBHOOK_SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"

# Rotas OAuth (relativas ao domínio da loja)
OAUTH_AUTHORIZE_PATH = "admin/oauth/authorize"
OAUTH_ACCESS_TOKEN_PATH = "admin/oauth/access_token"

# Verbos cujo payload vai na query string
QUERY_METHODS = frozenset({"GET", "DELETE"})

# Status de throttling
THROTTLED_STATUS = 429
NOT_FOUND_STATUS = 404
