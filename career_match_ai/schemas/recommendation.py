"""Recommendation records and the pipeline request/response shapes."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class RecommendationRecord(BaseModel):
    """One recommended career role. Exactly these four fields are recognized."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role_title: StrictStr = Field(..., description="Role name; also written to profiles.role_selected")
    description: StrictStr = Field(..., description="What the role involves")
    why_it_fits_professionally: StrictStr = Field(..., description="Fit against skills and experience")
    why_it_fits_personally: StrictStr = Field(..., description="Fit against interests and values")


class PipelineRequest(BaseModel):
    """Input of a recommendation run. Accepts the camelCase wire names."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(default="", alias="userId")
    resume_url: Optional[str] = Field(default=None, alias="resumeUrl")
    force_refresh: bool = Field(default=False, alias="forceRefresh")

    @field_validator("user_id", mode="before")
    @classmethod
    def _blank_user_id(cls, value: Any) -> Any:
        # JSON clients send a missing id as null
        return "" if value is None else value


RecommendationSource = Literal["cached", "generated", "default"]


class PipelineResponse(BaseModel):
    """Result of a recommendation run; recommendations is never empty."""

    recommendations: List[RecommendationRecord]
    source: RecommendationSource = "generated"
