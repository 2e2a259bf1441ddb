"""Configuração de logging estruturado.

Uso:
    from shopify_connector.config.logging import configure_logging

    configure_logging(level="INFO", service_name="minha-loja")

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from shopify_connector.config.logging.config import (
    configure_logging,
    log_fallback,
)
from shopify_connector.config.logging.filters import CorrelationIdFilter
from shopify_connector.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "log_fallback",
]
