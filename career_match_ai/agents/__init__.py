"""Agent exports."""

from .recommendation_agent import (
    RecommendationAgent,
    get_recommendations,
    handle_recommendation_request,
)

__all__ = ["RecommendationAgent", "get_recommendations", "handle_recommendation_request"]
