"""Aggregation engine: fans out to providers, scores, and caches the result.

This module is framework-agnostic. The FastMCP server imports from here, and
so can any other front end.
"""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Optional

import httpx

from .banner import STYLE_DEFAULT, apply_style, build_banner
from .cache import ResultCache, fingerprint
from .clients import efficiency, green_web, website_carbon
from .models import Banner, CacheStats, CheckerConfig, CompositeResult, ResultDetails
from .scoring import compute_score, eco_level_for, generate_recommendations, round_score
from .urls import extract_domain, normalize_url

logger = logging.getLogger(__name__)


class AggregationError(RuntimeError):
    """The fan-out or combination step failed; no result was produced."""


class EcoChecker:
    """Computes and caches eco-responsibility results for websites."""

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        cache: Optional[ResultCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or CheckerConfig()
        if cache is None:
            cache = ResultCache(
                duration_ms=self.config.cache_duration_ms,
                max_size=self.config.max_cache_size,
            )
        self.cache = cache
        self._transport = transport
        self._rng = rng

    async def check(self, url: str, use_cache: bool = True) -> CompositeResult:
        """Analyze a website and return its composite eco result.

        Args:
            url: Any non-empty string; ``https://`` is assumed when no scheme is given.
            use_cache: Serve a live cached result if present, and store the new one.

        Raises:
            AggregationError: if the providers could not be combined into a result.
        """
        clean_url = normalize_url(url)
        cache_key = fingerprint(clean_url)

        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info("Cache hit for %s", clean_url)
                return cached

        try:
            result = await self._analyze(clean_url, cache_key)
        except Exception as exc:
            logger.error("Analysis failed for %s: %s", clean_url, exc, exc_info=True)
            raise AggregationError(f"Analysis failed for {clean_url}: {exc}") from exc

        if use_cache:
            self.cache.put(cache_key, result)
        return result

    async def _analyze(self, clean_url: str, cache_key: str) -> CompositeResult:
        carbon, hosting, efficiency_result = await asyncio.gather(
            website_carbon.fetch_carbon_footprint(
                clean_url,
                base_url=self.config.website_carbon_url,
                transport=self._transport,
                rng=self._rng,
            ),
            green_web.fetch_green_hosting(
                extract_domain(clean_url),
                base_url=self.config.green_web_url,
                transport=self._transport,
                rng=self._rng,
            ),
            efficiency.analyze_efficiency(clean_url),
        )

        score = round_score(compute_score(carbon.data, hosting.data))
        now = datetime.now(timezone.utc)
        logger.info(
            "Scored %s at %.1f (carbon synthetic=%s, hosting synthetic=%s)",
            clean_url, score, carbon.data.is_synthetic, hosting.data.is_synthetic,
        )

        return CompositeResult(
            url=clean_url,
            score=score,
            eco_level=eco_level_for(score),
            timestamp=now,
            banner=build_banner(score, now=now),
            details=ResultDetails(
                carbon_footprint=carbon,
                green_hosting=hosting,
                efficiency=efficiency_result,
            ),
            recommendations=generate_recommendations(carbon.data, hosting.data),
            cache_key=cache_key,
        )

    async def banner_data(self, url: str, style: str = STYLE_DEFAULT) -> Banner:
        """Banner for ``url`` in the requested style, always going through the cache."""
        result = await self.check(url, use_cache=True)
        return apply_style(result.banner, result, style)

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def clear_cache(self) -> int:
        cleared = self.cache.clear()
        logger.info("Cache cleared (%d entries)", cleared)
        return cleared
