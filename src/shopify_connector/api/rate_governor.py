"""Controle de quota e throttling da Shopify Admin API.

Duas verificações independentes:
- Preventiva: antes de enviar, se o último header de call limit indica
  poucas chamadas restantes, pausa por `cooldown_seconds`.
- Reativa: após um 429, espera Retry-After (ou o padrão) e sinaliza que a
  mesma requisição deve ser reenviada, respeitando o limite de retentativas.
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shopify_connector.config.logging import log_fallback

from .constants import RETRY_AFTER_HEADER, THROTTLED_STATUS

if TYPE_CHECKING:
    from collections.abc import Callable

    from .response import ResponseMeta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Política de throttling e retentativa.

    Attributes:
        call_limit_threshold: Esfria quando restam menos chamadas que isso
        cooldown_seconds: Pausa preventiva
        default_retry_after_seconds: Espera no 429 sem Retry-After válido
        max_retries: Retentativas após 429 (None = sem limite)
        backoff_max_seconds: Teto da espera por retentativa
        jitter_seconds: Jitter máximo (uniforme) somado à espera
    """

    call_limit_threshold: int = 5
    cooldown_seconds: float = 5.0
    default_retry_after_seconds: float = 10.0
    max_retries: int | None = 10
    backoff_max_seconds: float = 60.0
    jitter_seconds: float = 1.0


class RateGovernor:
    """Aplica a RetryPolicy sobre os metadados das respostas.

    Args:
        policy: Política de throttling. Usa padrões se None.
        sleep: Função de espera (injetável para testes).
        rand: Gerador uniforme usado no jitter.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rand: Callable[[float, float], float] = random.uniform,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self._rand = rand

    def should_cool_down(self, meta: ResponseMeta | None) -> bool:
        """True se a última quota conhecida está abaixo do limiar."""
        if meta is None:
            return False
        call_limit = meta.call_limit
        if call_limit is None:
            return False
        used, limit = call_limit
        return limit - used < self.policy.call_limit_threshold

    def cool_down(self, meta: ResponseMeta | None) -> bool:
        """Pausa preventivamente se necessário.

        Returns:
            True se houve pausa.
        """
        if not self.should_cool_down(meta):
            return False
        logger.info(
            "shopify_call_limit_cooldown",
            extra={
                "call_limit": meta.call_limit if meta else None,
                "cooldown_seconds": self.policy.cooldown_seconds,
            },
        )
        self._sleep(self.policy.cooldown_seconds)
        return True

    def retry_after_seconds(self, meta: ResponseMeta) -> float:
        """Segundos pedidos pelo servidor no Retry-After, ou o padrão."""
        raw = meta.header(RETRY_AFTER_HEADER).strip()
        if not raw:
            log_fallback(logger, "retry_after", reason="header_missing")
            return self.policy.default_retry_after_seconds
        try:
            seconds = float(raw)
        except ValueError:
            seconds = math.nan
        if not math.isfinite(seconds):
            log_fallback(logger, "retry_after", reason="header_unparsable")
            return self.policy.default_retry_after_seconds
        return max(seconds, 0.0)

    def should_retry(self, meta: ResponseMeta, attempt: int) -> bool:
        """Espera e sinaliza reenvio se a resposta foi throttled.

        Args:
            meta: Metadados da resposta recém-recebida
            attempt: Número de retentativas já feitas para esta chamada

        Returns:
            True se a mesma requisição deve ser reenviada.
        """
        if meta.status_code != THROTTLED_STATUS:
            return False

        max_retries = self.policy.max_retries
        if max_retries is not None and attempt >= max_retries:
            logger.warning(
                "shopify_retry_exhausted",
                extra={"attempts": attempt, "max_retries": max_retries},
            )
            return False

        delay = self._backoff_delay(self.retry_after_seconds(meta))
        logger.warning(
            "shopify_throttled",
            extra={"attempt": attempt + 1, "delay_seconds": delay},
        )
        self._sleep(delay)
        return True

    def _backoff_delay(self, retry_after: float) -> float:
        delay = min(retry_after, self.policy.backoff_max_seconds)
        if self.policy.jitter_seconds > 0:
            delay += self._rand(0.0, self.policy.jitter_seconds)
        return delay
