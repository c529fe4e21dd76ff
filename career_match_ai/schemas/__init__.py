"""Schema exports."""

from .defaults import DEFAULT_RECOMMENDATIONS
from .profile import CategorySelection, ProfileSnapshot
from .prompt import PromptPayload
from .recommendation import PipelineRequest, PipelineResponse, RecommendationRecord

__all__ = [
    "CategorySelection",
    "ProfileSnapshot",
    "RecommendationRecord",
    "PipelineRequest",
    "PipelineResponse",
    "PromptPayload",
    "DEFAULT_RECOMMENDATIONS",
]
