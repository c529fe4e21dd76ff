"""Profile snapshot built from a user's discovery data and resume text."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CategorySelection(BaseModel):
    """Tags a user picked for one discovery category plus free-text notes."""

    model_config = ConfigDict(frozen=True)

    selected: List[str] = Field(default_factory=list, description="User-curated tags, in insertion order")
    additional_info: str = Field(default="", description="Free-text notes for the category")

    @field_validator("selected", mode="before")
    @classmethod
    def _clean_selected(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]

    @field_validator("additional_info", mode="before")
    @classmethod
    def _clean_info(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @property
    def is_empty(self) -> bool:
        return not self.selected and not self.additional_info


class ProfileSnapshot(BaseModel):
    """Immutable input to one pipeline run."""

    model_config = ConfigDict(frozen=True)

    skills: CategorySelection = Field(default_factory=CategorySelection)
    interests: CategorySelection = Field(default_factory=CategorySelection)
    values: CategorySelection = Field(default_factory=CategorySelection)
    timestamp: str = Field(default_factory=_utc_now_iso, description="When the discovery data was captured")
    resume_text: Optional[str] = Field(default=None, description="Plain text extracted from the resume")

    @classmethod
    def from_discovery_data(cls, raw: Any, resume_text: Optional[str] = None) -> "ProfileSnapshot":
        """
        Build a snapshot from the stored discovery_data JSON.
        Missing or malformed categories become empty selections.
        """
        data = raw if isinstance(raw, dict) else {}

        def category(key: str) -> CategorySelection:
            value = data.get(key)
            return CategorySelection.model_validate(value) if isinstance(value, dict) else CategorySelection()

        timestamp = data.get("timestamp")
        return cls(
            skills=category("skills"),
            interests=category("interests"),
            values=category("values"),
            timestamp=timestamp if isinstance(timestamp, str) and timestamp else _utc_now_iso(),
            resume_text=resume_text,
        )

    @property
    def has_discovery_data(self) -> bool:
        return not (self.skills.is_empty and self.interests.is_empty and self.values.is_empty)

    @property
    def has_resume_text(self) -> bool:
        return bool(self.resume_text and self.resume_text.strip())

    def with_resume_text(self, resume_text: Optional[str]) -> "ProfileSnapshot":
        return self.model_copy(update={"resume_text": resume_text})

    def to_discovery_data(self) -> Dict[str, Any]:
        """The discovery_data JSON stored on the profile row (resume text is stored separately)."""
        return self.model_dump(include={"skills", "interests", "values", "timestamp"})
