"""Shared test fixtures for unit tests.

Provides provider payloads, a controllable clock, fake HTTP transports, and
composite-result builders. No network access; all HTTP goes through
httpx.MockTransport.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from eco_checker.core.models import (
    CarbonFootprint,
    CompositeResult,
    EfficiencyAnalysis,
    GreenHosting,
    ProviderResult,
    ResultDetails,
)
from eco_checker.core.banner import build_banner
from eco_checker.core.scoring import eco_level_for


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingHandler:
    """MockTransport handler routing by host and recording every request."""

    def __init__(self, carbon_payload: dict | None = None, green_payload: dict | None = None):
        self.carbon_payload = carbon_payload
        self.green_payload = green_payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.websitecarbon.com":
            if self.carbon_payload is None:
                return httpx.Response(503)
            return httpx.Response(200, json=self.carbon_payload)
        if request.url.host == "api.thegreenwebfoundation.org":
            if self.green_payload is None:
                return httpx.Response(503)
            return httpx.Response(200, json=self.green_payload)
        return httpx.Response(404)


# === FIXTURES: Provider payloads ===


@pytest.fixture
def carbon_payload() -> dict:
    """Website Carbon /site response for example.com."""
    return {
        "url": "https://example.com",
        "green": False,
        "bytes": 524288,
        "cleanerThan": 0.6,
        "rating": "B",
        "statistics": {
            "co2": {"grid": {"grams": 0.5}, "renewable": {"grams": 0.43}},
            "energy": {"grid": {"wattHours": 0.0011}},
        },
    }


@pytest.fixture
def green_payload() -> dict:
    """Green Web Foundation greencheck response for example.com."""
    return {
        "url": "example.com",
        "green": False,
        "hostedby": "Example Hosting",
        "partner": None,
        "data_center": "Frankfurt",
        "modified": "2026-10-01T12:00:00",
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def provider_handler(carbon_payload: dict, green_payload: dict) -> RecordingHandler:
    """Both providers answering with the example.com payloads."""
    return RecordingHandler(carbon_payload, green_payload)


@pytest.fixture
def failing_handler() -> RecordingHandler:
    """Both providers answering 503."""
    return RecordingHandler()


# === FIXTURES: Composite results ===


@pytest.fixture
def make_result() -> Callable[..., CompositeResult]:
    """Build a CompositeResult without touching any provider."""

    def _make(url: str = "https://example.com", score: float = 62.5, green: bool = False) -> CompositeResult:
        now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        return CompositeResult(
            url=url,
            score=score,
            eco_level=eco_level_for(score),
            timestamp=now,
            banner=build_banner(score, now=now),
            details=ResultDetails(
                carbon_footprint=ProviderResult[CarbonFootprint](data=CarbonFootprint(url=url)),
                green_hosting=ProviderResult[GreenHosting](data=GreenHosting(url=url, green=green)),
                efficiency=ProviderResult[EfficiencyAnalysis](data=EfficiencyAnalysis()),
            ),
            recommendations=["🔄 Cache static resources"],
            cache_key=f"key_{url}",
        )

    return _make
