"""Page efficiency analysis.

Heuristic only for now: returns the standard best-practice list without
fetching the page.
"""

from __future__ import annotations

from ..models import EfficiencyAnalysis, ProviderResult

EFFICIENCY_RECOMMENDATIONS = [
    "Enable GZIP/Brotli compression",
    "Optimize images (WebP format)",
    "Cache static resources",
    "Use an eco-friendly CDN",
    "Reduce unused JavaScript",
]

ESTIMATED_SAVINGS = "Up to 40% energy savings"


async def analyze_efficiency(url: str) -> ProviderResult[EfficiencyAnalysis]:
    return ProviderResult[EfficiencyAnalysis](
        data=EfficiencyAnalysis(
            analysis_type="basic_efficiency",
            recommendations=list(EFFICIENCY_RECOMMENDATIONS),
            estimated_savings_description=ESTIMATED_SAVINGS,
        )
    )
