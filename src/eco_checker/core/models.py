"""Pydantic data models shared by the clients, scoring, cache, and server.

Attributes are snake_case; every model serializes with camelCase aliases
(``model_dump(by_alias=True)``), which is the shape the tool surface returns.
"""

from __future__ import annotations

import os
from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_CACHE_DURATION_MS = 3_600_000
DEFAULT_MAX_CACHE_SIZE = 100
DEFAULT_SWEEP_INTERVAL_SECONDS = 300
DEFAULT_WEBSITE_CARBON_URL = "https://api.websitecarbon.com"
DEFAULT_GREEN_WEB_URL = "https://api.thegreenwebfoundation.org"

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys while accepting both spellings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EcoLevel(str, Enum):
    """Coarse qualitative label derived from the numeric score."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "VeryGood"
    GOOD = "Good"
    AVERAGE = "Average"
    LOW = "Low"
    VERY_LOW = "VeryLow"


class CarbonFootprint(CamelModel):
    """Per-page-view carbon estimate from the Website Carbon provider."""

    url: Optional[str] = None
    green: bool = False
    bytes_transferred: Optional[float] = None
    cleaner_than_fraction: float = Field(0.0, ge=0.0, le=1.0, description="Share of tested pages this one beats")
    rating: str = "D"
    co2_grams_per_view: float = 1.0
    energy_watt_hours_per_view: float = 0.5
    is_synthetic: bool = False
    note: Optional[str] = None


class GreenHosting(CamelModel):
    """Green-hosting verdict from the Green Web Foundation provider."""

    url: Optional[str] = None
    green: bool = False
    hosted_by: str = "Unknown"
    is_partner: bool = False
    data_center: str = "Unknown"
    modified: Optional[str] = None
    is_synthetic: bool = False
    note: Optional[str] = None


class EfficiencyAnalysis(CamelModel):
    """Heuristic efficiency advice for a page."""

    analysis_type: str = "basic_efficiency"
    recommendations: list[str] = Field(default_factory=list)
    estimated_savings_description: str = ""


class ProviderResult(CamelModel, Generic[DataT]):
    """Normalized output of one provider adapter.

    ``success`` stays True: provider failures are absorbed into synthetic data.
    """

    success: bool = True
    data: DataT


class ResultDetails(CamelModel):
    """Per-provider data behind a composite score. Always fully populated."""

    carbon_footprint: ProviderResult[CarbonFootprint]
    green_hosting: ProviderResult[GreenHosting]
    efficiency: ProviderResult[EfficiencyAnalysis]


class BannerDetail(CamelModel):
    level: EcoLevel
    hosting: str


class Banner(CamelModel):
    """Display payload for the eco banner widget."""

    model_config = ConfigDict(frozen=True)

    show_banner: bool = True
    message: str
    emoji: str
    color: str = Field(description="Hex color, e.g. #2ecc71")
    score: float
    eco_level: EcoLevel
    last_updated: datetime
    details_link: str = "#eco-details"
    version: str = "1.0"
    additional_info: Optional[BannerDetail] = None


class CompositeResult(CamelModel):
    """The aggregated, scored record returned and cached for a checked URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    score: float = Field(ge=0.0, le=100.0)
    eco_level: EcoLevel
    timestamp: datetime
    banner: Banner
    details: ResultDetails
    recommendations: list[str] = Field(default_factory=list, max_length=6)
    cache_key: str


class CacheEntry(CamelModel):
    """A stored composite result and the monotonic time (ms) it was stored at."""

    key: str
    value: CompositeResult
    stored_at: float


class CacheStats(CamelModel):
    size: int
    duration: int = Field(description="Entry lifetime in milliseconds")
    max_size: int


class CheckerConfig(BaseModel):
    """Runtime configuration, read once when the checker is constructed."""

    cache_duration_ms: int = Field(DEFAULT_CACHE_DURATION_MS, gt=0)
    max_cache_size: int = Field(DEFAULT_MAX_CACHE_SIZE, gt=0)
    sweep_interval_seconds: int = Field(DEFAULT_SWEEP_INTERVAL_SECONDS, gt=0)
    website_carbon_url: str = DEFAULT_WEBSITE_CARBON_URL
    green_web_url: str = DEFAULT_GREEN_WEB_URL

    @classmethod
    def from_env(cls) -> CheckerConfig:
        return cls(
            cache_duration_ms=int(os.environ.get("CACHE_DURATION", str(DEFAULT_CACHE_DURATION_MS))),
            max_cache_size=int(os.environ.get("MAX_CACHE_SIZE", str(DEFAULT_MAX_CACHE_SIZE))),
            sweep_interval_seconds=int(os.environ.get(
                "CACHE_SWEEP_INTERVAL_SECONDS",
                str(DEFAULT_SWEEP_INTERVAL_SECONDS),
            )),
            website_carbon_url=os.environ.get("WEBSITE_CARBON_URL", DEFAULT_WEBSITE_CARBON_URL),
            green_web_url=os.environ.get("GREEN_WEB_URL", DEFAULT_GREEN_WEB_URL),
        )
