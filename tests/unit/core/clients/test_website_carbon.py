"""Tests for the Website Carbon client and its synthetic fallback."""

from __future__ import annotations

import random

import httpx
import pytest

from eco_checker.core.clients.website_carbon import (
    SYNTHETIC_RATINGS,
    fetch_carbon_footprint,
    synthetic_carbon_footprint,
)

URL = "https://example.com"


def _transport(response: httpx.Response | Exception, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(response, Exception):
            raise response
        return response

    return httpx.MockTransport(handler)


class TestFetchCarbonFootprint:

    @pytest.mark.asyncio
    async def test_maps_provider_fields(self, carbon_payload):
        seen: list[httpx.Request] = []
        result = await fetch_carbon_footprint(URL, transport=_transport(httpx.Response(200, json=carbon_payload), seen))

        assert result.success is True
        data = result.data
        assert data.is_synthetic is False
        assert data.rating == "B"
        assert data.co2_grams_per_view == 0.5
        assert data.energy_watt_hours_per_view == 0.0011
        assert data.cleaner_than_fraction == 0.6
        assert data.bytes_transferred == 524288
        assert data.green is False

        request = seen[0]
        assert request.url.path == "/site"
        assert request.url.params["url"] == URL
        assert request.headers["User-Agent"] == "EcoChecker/1.0"

    @pytest.mark.asyncio
    async def test_custom_base_url(self, carbon_payload):
        seen: list[httpx.Request] = []
        await fetch_carbon_footprint(
            URL,
            base_url="http://carbon.internal/",
            transport=_transport(httpx.Response(200, json=carbon_payload), seen),
        )
        assert str(seen[0].url).startswith("http://carbon.internal/site?")

    @pytest.mark.asyncio
    async def test_requests_use_ten_second_timeout(self, carbon_payload):
        seen: list[httpx.Request] = []
        await fetch_carbon_footprint(URL, transport=_transport(httpx.Response(200, json=carbon_payload), seen))
        assert seen[0].extensions["timeout"] == {"connect": 10.0, "read": 10.0, "write": 10.0, "pool": 10.0}

    @pytest.mark.asyncio
    async def test_missing_fields_get_conservative_defaults(self):
        result = await fetch_carbon_footprint(URL, transport=_transport(httpx.Response(200, json={"url": URL})))
        data = result.data
        assert data.is_synthetic is False
        assert data.rating == "D"
        assert data.co2_grams_per_view == 1.0
        assert data.cleaner_than_fraction == 0.0
        assert data.green is False
        assert data.bytes_transferred is None

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(503),
            httpx.Response(404, json={"error": "not found"}),
            httpx.Response(200, content=b"<html>maintenance</html>"),
            httpx.Response(200, json=[1, 2, 3]),
            httpx.Response(200, json={}),
            httpx.Response(200, json={"cleanerThan": 7}),
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
        ],
    )
    @pytest.mark.asyncio
    async def test_failures_fall_back_to_synthetic(self, response, seeded_rng):
        result = await fetch_carbon_footprint(URL, transport=_transport(response), rng=seeded_rng)
        assert result.success is True
        assert result.data.is_synthetic is True
        assert result.data.url == URL


class TestSyntheticCarbonFootprint:

    def test_bounds(self):
        rng = random.Random(1)
        for _ in range(300):
            data = synthetic_carbon_footprint(URL, rng).data
            assert 0.8 <= data.co2_grams_per_view < 2.0
            assert 0.5 <= data.cleaner_than_fraction < 0.8
            assert 0.3 <= data.energy_watt_hours_per_view < 1.0
            assert data.rating in SYNTHETIC_RATINGS
            assert data.green is False
            assert data.is_synthetic is True

    def test_seeded_rng_is_reproducible(self):
        a = synthetic_carbon_footprint(URL, random.Random(3)).data
        b = synthetic_carbon_footprint(URL, random.Random(3)).data
        assert a == b
