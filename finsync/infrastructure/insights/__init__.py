"""Remote insight generators."""

from finsync.infrastructure.insights.gemini_generator import GeminiInsightGenerator

__all__ = ["GeminiInsightGenerator"]
