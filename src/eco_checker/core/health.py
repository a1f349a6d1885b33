"""Reachability probes for the external providers."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 5.0

OPERATIONAL = "operational"
DEGRADED = "degraded"


async def _probe(client: httpx.AsyncClient, name: str, url: str) -> str:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Health probe for %s (%s) failed: %s", name, url, exc)
        return DEGRADED
    return OPERATIONAL


async def probe_providers(
    carbon_base_url: str,
    green_web_base_url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, str]:
    """Probe both providers concurrently. Returns a service name -> status mapping."""
    async with httpx.AsyncClient(timeout=httpx.Timeout(PROBE_TIMEOUT_SECONDS), transport=transport) as client:
        carbon_status, green_status = await asyncio.gather(
            _probe(client, "website_carbon", carbon_base_url),
            _probe(client, "green_web", green_web_base_url),
        )
    return {
        "website_carbon": carbon_status,
        "green_web": green_status,
        "cache": OPERATIONAL,
    }
