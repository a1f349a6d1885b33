"""Website Carbon API client.

API docs: https://api.websitecarbon.com/
No authentication required. Estimates CO2 and energy per page view.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import httpx
from pydantic import ValidationError

from ..models import DEFAULT_WEBSITE_CARBON_URL, CarbonFootprint, ProviderResult

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 10.0
USER_AGENT = "EcoChecker/1.0"

SYNTHETIC_RATINGS = ["A", "B", "C", "D", "E", "F"]

_rng = random.Random()


async def fetch_carbon_footprint(
    url: str,
    base_url: str = DEFAULT_WEBSITE_CARBON_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None,
) -> ProviderResult[CarbonFootprint]:
    """Fetch the carbon estimate for a normalized URL.

    Never raises for provider problems: timeouts, transport errors, non-2xx
    responses and malformed payloads all yield synthetic data instead.
    """
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS),
            transport=transport,
        ) as client:
            response = await client.get(
                f"{base_url.rstrip('/')}/site",
                params={"url": url},
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()

        if not payload:
            logger.warning("Website Carbon returned an empty body for %s, using synthetic data", url)
            return synthetic_carbon_footprint(url, rng)
        return ProviderResult[CarbonFootprint](data=_parse_carbon(payload))
    except (httpx.HTTPError, ValidationError, ValueError, TypeError) as exc:
        logger.warning("Website Carbon lookup failed for %s, using synthetic data: %s", url, exc)
        return synthetic_carbon_footprint(url, rng)


def _parse_carbon(payload: dict) -> CarbonFootprint:
    """Map the provider's response onto CarbonFootprint, defaulting missing fields."""
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected Website Carbon payload type: {type(payload).__name__}")

    statistics = payload.get("statistics") or {}
    co2 = _nested(statistics, "co2", "grid", "grams")
    energy = _nested(statistics, "energy", "grid", "wattHours")
    cleaner_than = payload.get("cleanerThan")

    return CarbonFootprint(
        url=payload.get("url"),
        green=bool(payload.get("green") or False),
        bytes_transferred=payload.get("bytes"),
        cleaner_than_fraction=cleaner_than if cleaner_than is not None else 0.0,
        rating=payload.get("rating") or "D",
        co2_grams_per_view=co2 if co2 is not None else 1.0,
        energy_watt_hours_per_view=energy if energy is not None else 0.5,
    )


def _nested(data: dict, *keys: str):
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def synthetic_carbon_footprint(url: str, rng: Optional[random.Random] = None) -> ProviderResult[CarbonFootprint]:
    """Bounded placeholder data used when the provider is unavailable."""
    rng = rng or _rng
    return ProviderResult[CarbonFootprint](
        data=CarbonFootprint(
            url=url,
            green=False,
            cleaner_than_fraction=0.5 + rng.random() * 0.3,
            rating=rng.choice(SYNTHETIC_RATINGS),
            co2_grams_per_view=0.8 + rng.random() * 1.2,
            energy_watt_hours_per_view=0.3 + rng.random() * 0.7,
            is_synthetic=True,
            note="Demonstration data - carbon provider unavailable",
        )
    )
