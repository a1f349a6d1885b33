"""Cache sweep scheduler.

Removes expired cache entries on a fixed interval, independent of traffic.
Uses plain asyncio tasks.
"""

from __future__ import annotations

import asyncio
import logging

from .core.cache import ResultCache
from .core.models import DEFAULT_SWEEP_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Owns the background task that periodically sweeps a ResultCache."""

    def __init__(self, cache: ResultCache, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS):
        self._cache = cache
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background sweep loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Cache sweeper started (interval: %ss)", self._interval_seconds)

    async def stop(self):
        """Stop the background sweep loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Cache sweeper stopped")

    async def _run_loop(self):
        while self._running:
            try:
                await asyncio.sleep(self._interval_seconds)
                if not self._running:
                    break
                self._cache.sweep()
            except asyncio.CancelledError:
                break
            except Exception as exc:
                logger.error("Cache sweep failed: %s", exc, exc_info=True)
