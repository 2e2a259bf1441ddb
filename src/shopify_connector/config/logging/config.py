"""Configuração centralizada de logging.

Uso:
    import logging

    from shopify_connector.config.logging import configure_logging

    # Uma vez, na inicialização da aplicação que usa o conector
    configure_logging(level="INFO", service_name="minha-loja")

    # Em qualquer módulo
    logger = logging.getLogger(__name__)
    logger.info("shopify_request_ok", extra={"status_code": 200})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shopify_connector.config.logging.filters import CorrelationIdFilter
from shopify_connector.config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "shopify-connector"

# Loggers do stack HTTP que registram cada requisição (URL inclusa) em INFO
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado.

    Os loggers do httpx/httpcore ficam em WARNING, salvo em DEBUG.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    http_level = logging.DEBUG if level_upper == "DEBUG" else logging.WARNING
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log observável de fallback usado (sem PII).

    Registra quando um valor padrão determinístico foi aplicado
    (ex: Retry-After ausente no 429).

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "retry_after").
        reason: Razão do fallback (ex: "header_missing").
        elapsed_ms: Tempo decorrido em ms (quando aplicável).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
