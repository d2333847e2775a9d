"""Insight generation: prompt rendering, the candidate cascade and the local fallback."""

from finsync.application.insights.insight_cascade import InsightCascade
from finsync.application.insights.local_insights import (
    LocalInsightEngine,
    estimate_monthly_income_tax,
)
from finsync.application.insights.prompt_builder import InsightPromptBuilder

__all__ = [
    "InsightCascade",
    "InsightPromptBuilder",
    "LocalInsightEngine",
    "estimate_monthly_income_tax",
]
