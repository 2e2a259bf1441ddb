"""Helpers do fluxo OAuth (authorization code) da Shopify."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote_plus

from .constants import OAUTH_AUTHORIZE_PATH

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_authorize_url(
    shop_domain: str,
    api_key: str,
    scope: str | Iterable[str] = "",
    redirect_url: str = "",
    nonce: str = "",
) -> str:
    """Monta a URL de autorização do app para a loja.

    Args:
        shop_domain: Domínio da loja (sem protocolo)
        api_key: Client ID do app
        scope: Escopos como string "a,b" ou lista
        redirect_url: redirect_uri opcional
        nonce: Valor opcional para `state`

    Returns:
        URL no formato https://{loja}/admin/oauth/authorize?client_id=...
    """
    if not isinstance(scope, str):
        scope = ",".join(scope)

    url = (
        f"https://{shop_domain}/{OAUTH_AUTHORIZE_PATH}"
        f"?client_id={api_key}&scope={quote_plus(scope)}"
    )
    if redirect_url:
        url += f"&redirect_uri={quote_plus(redirect_url)}"
    if nonce:
        url += f"&state={quote_plus(nonce)}"
    return url
