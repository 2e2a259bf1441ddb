"""Configuração do pytest para o shopify_connector."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from shopify_connector.api.http_client import ShopifyHttpClient  # noqa: E402
from shopify_connector.api.rate_governor import RetryPolicy  # noqa: E402
from tests.fakes.fake_transport import FakeTransport, SleepRecorder  # noqa: E402


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def policy() -> RetryPolicy:
    """Política sem jitter para esperas determinísticas."""
    return RetryPolicy(jitter_seconds=0.0)


@pytest.fixture
def http_client(
    transport: FakeTransport,
    policy: RetryPolicy,
    sleeper: SleepRecorder,
) -> ShopifyHttpClient:
    return ShopifyHttpClient(transport, policy, sleep=sleeper)
