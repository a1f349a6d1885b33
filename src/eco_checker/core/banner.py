"""Banner payloads for embedding the eco score on a website."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .models import Banner, BannerDetail, CompositeResult
from .scoring import eco_level_for, round_score

# (minimum score, message, emoji, color), highest first
BANNER_BANDS = [
    (80, "This website is eco-responsible!", "✅", "#2ecc71"),
    (60, "This website follows good environmental practices.", "🌿", "#27ae60"),
    (40, "This website can reduce its environmental impact.", "⚠️", "#f39c12"),
]
LOW_BAND = ("This website has a high environmental impact.", "🔴", "#e74c3c")

STYLE_DEFAULT = "default"
STYLE_MINIMAL = "minimal"
STYLE_DETAILED = "detailed"


def build_banner(score: float, now: Optional[datetime] = None) -> Banner:
    """Map a score onto its banner band."""
    message, emoji, color = LOW_BAND
    for threshold, band_message, band_emoji, band_color in BANNER_BANDS:
        if score >= threshold:
            message, emoji, color = band_message, band_emoji, band_color
            break

    rounded = round_score(score)
    return Banner(
        message=f"{emoji} {message}",
        emoji=emoji,
        color=color,
        score=rounded,
        eco_level=eco_level_for(rounded),
        last_updated=now or datetime.now(timezone.utc),
    )


def apply_style(banner: Banner, result: CompositeResult, style: str = STYLE_DEFAULT) -> Banner:
    """Return a display variant of ``banner``; the input is never modified.

    Unknown styles behave like ``default``.
    """
    if style == STYLE_MINIMAL:
        return banner.model_copy(update={"message": f"{banner.emoji} {result.score:g}/100"})
    if style == STYLE_DETAILED:
        hosting = "Green" if result.details.green_hosting.data.green else "Standard"
        return banner.model_copy(
            update={"additional_info": BannerDetail(level=result.eco_level, hosting=hosting)}
        )
    return banner
