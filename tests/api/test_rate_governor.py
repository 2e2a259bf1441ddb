"""Testes do RateGovernor (call limit preventivo e 429 reativo)."""

from __future__ import annotations

import logging

import pytest

from shopify_connector.api.rate_governor import RateGovernor, RetryPolicy
from shopify_connector.api.response import ResponseMeta
from tests.fakes.fake_transport import SleepRecorder


def _meta(status: int = 200, **headers: str) -> ResponseMeta:
    return ResponseMeta(status_code=status, headers={k.replace("_", "-"): v for k, v in headers.items()})


def _call_limit(value: str) -> ResponseMeta:
    return ResponseMeta(status_code=200, headers={"X-Shopify-Shop-Api-Call-Limit": value})


@pytest.fixture
def governor(sleeper: SleepRecorder) -> RateGovernor:
    return RateGovernor(RetryPolicy(jitter_seconds=0.0), sleep=sleeper)


class TestCoolDown:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("38/40", True), ("36/40", True), ("35/40", False), ("30/40", False), ("40/40", True)],
    )
    def test_should_cool_down_threshold(
        self, governor: RateGovernor, value: str, expected: bool
    ) -> None:
        assert governor.should_cool_down(_call_limit(value)) is expected

    def test_no_previous_response_or_header_means_no_delay(
        self, governor: RateGovernor, sleeper: SleepRecorder
    ) -> None:
        assert governor.cool_down(None) is False
        assert governor.cool_down(_meta()) is False
        assert sleeper.calls == []

    def test_cool_down_sleeps_configured_seconds(
        self, governor: RateGovernor, sleeper: SleepRecorder
    ) -> None:
        assert governor.cool_down(_call_limit("39/40")) is True
        assert sleeper.calls == [5.0]


class TestRetry:
    def test_non_429_never_retries(self, governor: RateGovernor, sleeper: SleepRecorder) -> None:
        assert governor.should_retry(_meta(500), 0) is False
        assert sleeper.calls == []

    def test_retry_after_is_respected(self, governor: RateGovernor, sleeper: SleepRecorder) -> None:
        assert governor.should_retry(_meta(429, Retry_After="2"), 0) is True
        assert sleeper.calls == [2.0]

    def test_missing_retry_after_logs_fallback(
        self,
        governor: RateGovernor,
        sleeper: SleepRecorder,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO):
            assert governor.should_retry(_meta(429), 0) is True

        assert sleeper.calls == [10.0]
        assert any(getattr(r, "fallback_used", False) for r in caplog.records)

    def test_unparsable_retry_after_uses_default(self, governor: RateGovernor) -> None:
        assert governor.retry_after_seconds(_meta(429, Retry_After="soon")) == 10.0

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-inf"])
    def test_non_finite_retry_after_uses_default(
        self,
        governor: RateGovernor,
        sleeper: SleepRecorder,
        caplog: pytest.LogCaptureFixture,
        value: str,
    ) -> None:
        with caplog.at_level(logging.INFO):
            assert governor.should_retry(_meta(429, Retry_After=value), 0) is True

        assert sleeper.calls == [10.0]
        assert any(getattr(r, "reason", None) == "header_unparsable" for r in caplog.records)

    def test_delay_is_capped(self, sleeper: SleepRecorder) -> None:
        governor = RateGovernor(
            RetryPolicy(backoff_max_seconds=30.0, jitter_seconds=0.0), sleep=sleeper
        )

        governor.should_retry(_meta(429, Retry_After="120"), 0)

        assert sleeper.calls == [30.0]

    def test_jitter_is_added_on_top_of_retry_after(self, sleeper: SleepRecorder) -> None:
        governor = RateGovernor(
            RetryPolicy(jitter_seconds=1.0), sleep=sleeper, rand=lambda low, high: high / 2
        )

        governor.should_retry(_meta(429, Retry_After="2"), 0)

        assert sleeper.calls == [2.5]

    def test_stops_when_budget_is_spent(self, sleeper: SleepRecorder) -> None:
        governor = RateGovernor(RetryPolicy(max_retries=1, jitter_seconds=0.0), sleep=sleeper)

        assert governor.should_retry(_meta(429, Retry_After="1"), 0) is True
        assert governor.should_retry(_meta(429, Retry_After="1"), 1) is False
        assert sleeper.calls == [1.0]
