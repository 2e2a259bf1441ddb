"""Settings específicas da Shopify Admin API.

Credenciais do app, loja padrão, timeouts e política de throttling.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from shopify_connector.api.rate_governor import RetryPolicy


@dataclass(frozen=True)
class ShopifySettings:
    """Configurações do conector Shopify.

    Attributes:
        api_key: Client ID do app
        api_secret: Client secret (usado também nas validações HMAC)
        access_token: Token offline/online da loja
        shop_url: Domínio da loja (com ou sem protocolo)
        request_timeout_seconds: Timeout total por requisição
        connect_timeout_seconds: Timeout de conexão
        verify_ssl: Verificação TLS (desligada por padrão)
        call_limit_threshold: Chamadas restantes abaixo das quais esfriamos
        cooldown_seconds: Pausa preventiva quando a quota está baixa
        default_retry_after_seconds: Espera no 429 sem Retry-After
        max_retries: Retentativas no 429 (None = sem limite)
        backoff_max_seconds: Teto de espera por retentativa
        jitter_seconds: Jitter máximo somado à espera
    """

    # Credenciais
    api_key: str = ""
    api_secret: str = ""
    access_token: str = ""
    shop_url: str = ""

    # Transporte
    request_timeout_seconds: float = 120.0
    connect_timeout_seconds: float = 120.0
    verify_ssl: bool = False

    # Throttling
    call_limit_threshold: int = 5
    cooldown_seconds: float = 5.0
    default_retry_after_seconds: float = 10.0
    max_retries: int | None = 10
    backoff_max_seconds: float = 60.0
    jitter_seconds: float = 1.0

    def retry_policy(self) -> RetryPolicy:
        """Monta a RetryPolicy equivalente a estas settings."""
        return RetryPolicy(
            call_limit_threshold=self.call_limit_threshold,
            cooldown_seconds=self.cooldown_seconds,
            default_retry_after_seconds=self.default_retry_after_seconds,
            max_retries=self.max_retries,
            backoff_max_seconds=self.backoff_max_seconds,
            jitter_seconds=self.jitter_seconds,
        )

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("SHOPIFY_API_KEY não configurado")

        if not self.api_secret:
            errors.append("SHOPIFY_API_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("SHOPIFY_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.connect_timeout_seconds <= 0:
            errors.append("SHOPIFY_CONNECT_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries is not None and self.max_retries < 0:
            errors.append("SHOPIFY_MAX_RETRIES deve ser >= 0 (ou -1 para ilimitado)")

        if self.cooldown_seconds < 0 or self.default_retry_after_seconds < 0:
            errors.append("Tempos de espera não podem ser negativos")

        if self.jitter_seconds < 0:
            errors.append("SHOPIFY_JITTER_SECONDS deve ser >= 0")

        return errors


def _parse_max_retries(raw: str) -> int | None:
    """Converte SHOPIFY_MAX_RETRIES; valores negativos significam sem limite."""
    value = int(raw)
    return None if value < 0 else value


def _load_from_env() -> ShopifySettings:
    """Carrega ShopifySettings a partir de variáveis de ambiente."""
    return ShopifySettings(
        api_key=os.getenv("SHOPIFY_API_KEY", ""),
        api_secret=os.getenv("SHOPIFY_API_SECRET", ""),
        access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", ""),
        shop_url=os.getenv("SHOPIFY_SHOP_URL", ""),
        request_timeout_seconds=float(
            os.getenv("SHOPIFY_REQUEST_TIMEOUT_SECONDS", "120")
        ),
        connect_timeout_seconds=float(
            os.getenv("SHOPIFY_CONNECT_TIMEOUT_SECONDS", "120")
        ),
        verify_ssl=os.getenv("SHOPIFY_VERIFY_SSL", "false").lower() in ("true", "1"),
        call_limit_threshold=int(os.getenv("SHOPIFY_CALL_LIMIT_THRESHOLD", "5")),
        cooldown_seconds=float(os.getenv("SHOPIFY_COOLDOWN_SECONDS", "5")),
        default_retry_after_seconds=float(
            os.getenv("SHOPIFY_DEFAULT_RETRY_AFTER_SECONDS", "10")
        ),
        max_retries=_parse_max_retries(os.getenv("SHOPIFY_MAX_RETRIES", "10")),
        backoff_max_seconds=float(os.getenv("SHOPIFY_BACKOFF_MAX_SECONDS", "60")),
        jitter_seconds=float(os.getenv("SHOPIFY_JITTER_SECONDS", "1")),
    )


@lru_cache(maxsize=1)
def get_shopify_settings() -> ShopifySettings:
    """Retorna instância cacheada de ShopifySettings."""
    return _load_from_env()
