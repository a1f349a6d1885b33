"""Eco-responsibility scoring rule set.

Combines carbon and green-hosting data into a single 0-100 score. Every rule
is total: synthetic provider data scores like real data, except that
unverifiable hosting earns partial credit.
"""

from __future__ import annotations

import logging
import math

from .models import CarbonFootprint, EcoLevel, GreenHosting

logger = logging.getLogger(__name__)

BASE_SCORE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0
MAX_RECOMMENDATIONS = 6

GREEN_HOSTING_POINTS = 30.0
UNVERIFIED_HOSTING_POINTS = 10.0
CLEANLINESS_WEIGHT = 10.0

RATING_POINTS: dict[str, float] = {
    "A+": 10, "A": 9, "A-": 8,
    "B+": 7, "B": 6, "B-": 5,
    "C+": 4, "C": 3, "C-": 2,
    "D+": 1, "D": 0, "D-": -1,
    "E": -2, "F": -3,
}

# (level, minimum score), highest first
ECO_LEVEL_THRESHOLDS: list[tuple[EcoLevel, float]] = [
    (EcoLevel.EXCELLENT, 85),
    (EcoLevel.VERY_GOOD, 70),
    (EcoLevel.GOOD, 55),
    (EcoLevel.AVERAGE, 40),
    (EcoLevel.LOW, 25),
]

GREEN_HOSTING_RECOMMENDATION = "🌱 Switch to green hosting (up to 80% lower footprint)"
PERFORMANCE_RECOMMENDATION = "⚡ Optimize performance (compression, caching, images)"
GENERIC_RECOMMENDATIONS = [
    "📦 Use an eco-friendly CDN",
    "🎯 Serve images in WebP format",
    "🚀 Enable GZIP/Brotli compression",
    "💡 Remove unused JavaScript",
    "🔄 Cache static resources",
]


def _hosting_points(hosting: GreenHosting) -> float:
    if hosting.green:
        return GREEN_HOSTING_POINTS
    if hosting.is_synthetic:
        return UNVERIFIED_HOSTING_POINTS
    return 0.0


def _carbon_points(co2_grams: float) -> float:
    """Points for CO2 grams per view.

    Values in [1.5, 2.5] earn nothing; only > 2.5 is penalized.
    """
    if co2_grams < 0.3:
        return 40.0
    if co2_grams < 0.6:
        return 30.0
    if co2_grams < 1.0:
        return 20.0
    if co2_grams < 1.5:
        return 10.0
    if co2_grams > 2.5:
        return -20.0
    return 0.0


def compute_score(carbon: CarbonFootprint, hosting: GreenHosting) -> float:
    """Compute the unrounded score, clamped to [0, 100]."""
    score = BASE_SCORE
    score += _hosting_points(hosting)
    score += _carbon_points(carbon.co2_grams_per_view)
    score += RATING_POINTS.get(carbon.rating, 0)
    score += carbon.cleaner_than_fraction * CLEANLINESS_WEIGHT

    clamped = max(MIN_SCORE, min(MAX_SCORE, score))
    logger.debug("Score %.3f (raw %.3f) for rating=%s co2=%.3f", clamped, score, carbon.rating, carbon.co2_grams_per_view)
    return clamped


def round_score(score: float) -> float:
    """Round to one decimal, halves rounding up."""
    return math.floor(score * 10 + 0.5) / 10


def eco_level_for(score: float) -> EcoLevel:
    for level, threshold in ECO_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return EcoLevel.VERY_LOW


def generate_recommendations(carbon: CarbonFootprint, hosting: GreenHosting) -> list[str]:
    """Specific recommendations first, then generic best practices, at most six."""
    recommendations = []

    if not hosting.green:
        recommendations.append(GREEN_HOSTING_RECOMMENDATION)

    if carbon.co2_grams_per_view > 1.0:
        recommendations.append(PERFORMANCE_RECOMMENDATION)

    recommendations.extend(GENERIC_RECOMMENDATIONS)

    return list(dict.fromkeys(recommendations))[:MAX_RECOMMENDATIONS]
