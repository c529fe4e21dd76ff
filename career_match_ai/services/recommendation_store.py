"""Supabase-backed store for recommendation rows and the profile fields the pipeline uses."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from career_match_ai.config import RECOMMENDATION_COUNT, SUPABASE_SERVICE_KEY, SUPABASE_URL
from career_match_ai.errors import PersistenceError, PreconditionError
from career_match_ai.schemas.recommendation import RecommendationRecord
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

RECOMMENDATIONS_TABLE = "role_recommendations"
PROFILES_TABLE = "profiles"
RECORD_FIELDS = (
    "role_title",
    "description",
    "why_it_fits_professionally",
    "why_it_fits_personally",
)


@dataclass(frozen=True)
class StoredProfile:
    discovery_data: Optional[Dict[str, Any]] = None
    resume_link: Optional[str] = None
    resume_text: Optional[str] = None


def supabase_client(url: str = SUPABASE_URL, key: str = SUPABASE_SERVICE_KEY) -> Client:
    if not url or not key:
        raise PreconditionError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
    return create_client(url, key)


class RecommendationStore:
    """Sole writer of persisted recommendation rows. Every failure surfaces as PersistenceError."""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls) -> "RecommendationStore":
        return cls(supabase_client())

    def get_recent_recommendations(
        self, user_id: str, limit: int = RECOMMENDATION_COUNT
    ) -> List[RecommendationRecord]:
        """Most recently created rows for the user, newest first."""
        try:
            rows = (
                self.client.table(RECOMMENDATIONS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
                .data
            ) or []
        except Exception as e:
            raise PersistenceError("get_recent_recommendations", str(e)) from e

        records = []
        for row in rows:
            try:
                records.append(RecommendationRecord.model_validate({k: row.get(k) for k in RECORD_FIELDS}))
            except ValueError:
                logger.warning("Skipping malformed recommendation row for user %s: %s", user_id, row.get("id"))
        return records

    def get_profile(self, user_id: str) -> StoredProfile:
        try:
            row = (
                self.client.table(PROFILES_TABLE)
                .select("discovery_data, resume_link, resume_text")
                .eq("id", user_id)
                .single()
                .execute()
                .data
            )
        except Exception as e:
            raise PersistenceError("get_profile", str(e)) from e

        row = row or {}
        discovery_data = row.get("discovery_data")
        return StoredProfile(
            discovery_data=discovery_data if isinstance(discovery_data, dict) else None,
            resume_link=row.get("resume_link") or None,
            resume_text=row.get("resume_text") or None,
        )

    def insert_recommendation(self, user_id: str, record: RecommendationRecord) -> None:
        """Append one row; older rows for the user are kept."""
        row = {"user_id": user_id, **record.model_dump(include=set(RECORD_FIELDS))}
        self._run("insert_recommendation", lambda: self.client.table(RECOMMENDATIONS_TABLE).insert(row).execute())

    def save_resume_text(self, user_id: str, resume_text: str) -> None:
        self._update_profile("save_resume_text", user_id, {"resume_text": resume_text})

    def update_resume_link(self, user_id: str, resume_link: str) -> None:
        self._update_profile("update_resume_link", user_id, {"resume_link": resume_link})

    def save_discovery_data(
        self,
        user_id: str,
        discovery_data: Dict[str, Any],
        resume_url: Optional[str] = None,
    ) -> None:
        """Store the discovery answers and mark discovery as done."""
        update: Dict[str, Any] = {"discovery_data": discovery_data, "discovery_done": True}
        if resume_url:
            update["resume_link"] = resume_url
        self._update_profile("save_discovery_data", user_id, update)

    def select_role(self, user_id: str, role_title: str) -> None:
        """Record the role the user picked from their recommendations."""
        if not role_title:
            raise PreconditionError("role_title is required")
        self._update_profile("select_role", user_id, {"role_selected": role_title})

    def _update_profile(self, operation: str, user_id: str, update: Dict[str, Any]) -> None:
        self._run(operation, lambda: self.client.table(PROFILES_TABLE).update(update).eq("id", user_id).execute())

    def _run(self, operation: str, call) -> None:
        try:
            call()
        except Exception as e:
            raise PersistenceError(operation, str(e)) from e
