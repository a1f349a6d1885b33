"""Eco Checker MCP Server.

FastMCP server exposing website eco-responsibility checks, banner data,
health, stats, and cache management.
Run: eco-checker-mcp
"""

from __future__ import annotations

import logging
import platform
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from . import __version__
from .core.engine import EcoChecker
from .core.health import probe_providers
from .core.models import CheckerConfig
from .scheduler import CacheSweeper

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
DESTRUCTIVE = ToolAnnotations(readOnlyHint=False, destructiveHint=True, idempotentHint=True, openWorldHint=False)

checker = EcoChecker(CheckerConfig.from_env())
sweeper = CacheSweeper(checker.cache, checker.config.sweep_interval_seconds)
_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Start the cache sweeper for the lifetime of the server."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    await sweeper.start()
    try:
        yield
    finally:
        await sweeper.stop()


mcp = FastMCP(
    "Eco Checker",
    instructions="Check how eco-responsible a website is: carbon footprint per page view, green hosting, and an overall 0-100 score with recommendations.",
    lifespan=lifespan,
)


def _require_url(url: str) -> str:
    if not url or not url.strip():
        raise ValueError('The "url" parameter is required, e.g. "example.com" or "https://example.com".')
    return url


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _uptime_seconds() -> float:
    return round(time.monotonic() - _started_at, 1)


# ─── Tool 1: Check ───────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def eco_check(url: str, use_cache: bool = True, include_details: bool = True) -> dict:
    """Eco-responsibility score for a website, with carbon per view, green hosting, and recommendations.

    Args:
        url: Website to analyze. The scheme is optional ('example.com' works).
        use_cache: Reuse a result computed within the cache lifetime. Default True.
        include_details: Include per-provider details and recommendations. Default True.
    """
    result = await checker.check(_require_url(url), use_cache=use_cache)

    data = result.model_dump(mode="json", by_alias=True)
    if not include_details:
        data.pop("details", None)
        data.pop("recommendations", None)

    return {
        "data": data,
        "meta": {"cached": use_cache, "timestamp": _now_iso()},
    }


# ─── Tool 2: Banner ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def eco_banner(url: str, style: str = "default") -> dict:
    """Banner payload (message, emoji, color, score) for embedding on the analyzed website.

    Args:
        url: Website to analyze.
        style: 'default', 'minimal' (compact "emoji score/100" message), or 'detailed' (adds level and hosting).
    """
    banner = await checker.banner_data(_require_url(url), style)
    return {
        "data": banner.model_dump(mode="json", by_alias=True, exclude_none=True),
        "meta": {"style": style, "timestamp": _now_iso()},
    }


# ─── Tool 3: Health ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def eco_health() -> dict:
    """Service health: reachability of the carbon and green-hosting providers."""
    services = await probe_providers(checker.config.website_carbon_url, checker.config.green_web_url)
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": _now_iso(),
        "uptime_seconds": _uptime_seconds(),
        "services": services,
    }


# ─── Tool 4: Stats ───────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def eco_stats() -> dict:
    """Cache statistics and runtime information."""
    cache_stats = checker.cache_stats()
    return {
        "cache": cache_stats.model_dump(by_alias=True),
        "server": {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
            "uptime_seconds": _uptime_seconds(),
            "sweeper_running": sweeper.running,
        },
        "requests": {"cached": cache_stats.size},
    }


# ─── Tool 5: Clear cache ─────────────────────────────────────────────────────


@mcp.tool(annotations=DESTRUCTIVE)
async def eco_clear_cache() -> dict:
    """Empty the result cache. The next check of every website queries the providers again."""
    cleared = checker.clear_cache()
    return {
        "message": "Cache cleared",
        "items_cleared": cleared,
        "timestamp": _now_iso(),
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
