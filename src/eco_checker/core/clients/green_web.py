"""Green Web Foundation greencheck API client.

API docs: https://developers.thegreenwebfoundation.org/api/greencheck/v3/check-single-domain/
No authentication required. Takes a bare domain, not a URL.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import httpx
from pydantic import ValidationError

from ..models import DEFAULT_GREEN_WEB_URL, GreenHosting, ProviderResult

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 10.0
USER_AGENT = "EcoChecker/1.0"

# Share of synthetic results reported as green hosted
SYNTHETIC_GREEN_PROBABILITY = 0.3

_rng = random.Random()


async def fetch_green_hosting(
    domain: str,
    base_url: str = DEFAULT_GREEN_WEB_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None,
) -> ProviderResult[GreenHosting]:
    """Check whether a domain is served from verified green infrastructure.

    Never raises for provider problems; falls back to synthetic data.
    """
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS),
            transport=transport,
        ) as client:
            response = await client.get(
                f"{base_url.rstrip('/')}/greencheck/{domain}",
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()

        if not payload:
            logger.warning("Green Web returned an empty body for %s, using synthetic data", domain)
            return synthetic_green_hosting(domain, rng)
        return ProviderResult[GreenHosting](data=_parse_greencheck(payload))
    except (httpx.HTTPError, ValidationError, ValueError, TypeError) as exc:
        logger.warning("Green Web lookup failed for %s, using synthetic data: %s", domain, exc)
        return synthetic_green_hosting(domain, rng)


def _parse_greencheck(payload: dict) -> GreenHosting:
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected Green Web payload type: {type(payload).__name__}")

    return GreenHosting(
        url=payload.get("url"),
        green=bool(payload.get("green") or False),
        hosted_by=payload.get("hostedby") or "Unknown",
        is_partner=bool(payload.get("partner") or False),
        data_center=payload.get("data_center") or "Unknown",
        modified=payload.get("modified"),
    )


def synthetic_green_hosting(domain: str, rng: Optional[random.Random] = None) -> ProviderResult[GreenHosting]:
    """Placeholder verdict used when the provider is unavailable."""
    rng = rng or _rng
    is_green = rng.random() < SYNTHETIC_GREEN_PROBABILITY
    return ProviderResult[GreenHosting](
        data=GreenHosting(
            url=domain,
            green=is_green,
            hosted_by="Green Hosting Inc." if is_green else "Standard Hosting Corp.",
            is_partner=is_green,
            data_center="Solar Data Center" if is_green else "Standard Data Center",
            is_synthetic=True,
            note="Demonstration data - green hosting provider unavailable",
        )
    )
