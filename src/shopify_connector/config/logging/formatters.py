"""Formatters de logging estruturado.

Define o formatter JSON com os campos obrigatórios de todo log do conector:
- correlation_id
- service
- timestamp (asctime)
- level
- logger (name)
- message

Nunca logar access tokens, secrets ou payloads da loja.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "WARNING",
            "logger": "shopify_connector.api.rate_governor",
            "message": "shopify_throttled",
            "correlation_id": "abc-123",
            "service": "shopify-connector",
            "retry_after_seconds": 2.0
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
