"""Resume upload to per-user Supabase storage folders, with one provisioning retry."""

import time
from pathlib import PurePath
from typing import Optional

from supabase import Client

from career_match_ai.config import RESUME_BUCKET, SIGNED_URL_TTL_SECONDS
from career_match_ai.errors import PreconditionError, ProvisioningError
from career_match_ai.services.recommendation_store import RecommendationStore
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER_NAME = ".placeholder"
NOT_FOUND_MARKERS = ("the resource was not found", "not found")


def is_not_found_error(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in NOT_FOUND_MARKERS)


def build_resume_path(user_id: str, filename: str, now_ms: Optional[int] = None) -> str:
    """<user_id>/<unix-ms>.<ext>; the timestamp avoids collisions between uploads."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    ext = PurePath(filename or "").suffix.lstrip(".").lower() or "pdf"
    return f"{user_id}/{stamp}.{ext}"


class ResumeStorage:
    """Upload resumes and mint long-lived signed URLs for them."""

    def __init__(self, client: Client, store: RecommendationStore, bucket: str = RESUME_BUCKET):
        self.client = client
        self.store = store
        self.bucket = bucket

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    def _provision_folder(self, user_id: str) -> None:
        """Create the user's folder by uploading an empty placeholder and deleting it."""
        placeholder = f"{user_id}/{PLACEHOLDER_NAME}"
        self._bucket().upload(placeholder, b"", {"content-type": "text/plain"})
        self._bucket().remove([placeholder])
        logger.info("Provisioned storage folder for user %s", user_id)

    def _upload_with_provisioning(self, user_id: str, path: str, data: bytes, content_type: str) -> None:
        options = {"content-type": content_type, "cache-control": "3600", "upsert": "false"}
        provisioned = False
        while True:
            try:
                self._bucket().upload(path, data, options)
                return
            except Exception as e:
                if not is_not_found_error(e):
                    raise
                if provisioned:
                    raise ProvisioningError(f"Upload still failing after provisioning {user_id}/: {e}") from e
                logger.warning("Storage folder missing for user %s, provisioning: %s", user_id, e)
            try:
                self._provision_folder(user_id)
            except Exception as e:
                raise ProvisioningError(f"Could not provision storage folder for {user_id}: {e}") from e
            provisioned = True

    def _signed_url(self, path: str) -> str:
        result = self._bucket().create_signed_url(path, SIGNED_URL_TTL_SECONDS)
        url = None
        if isinstance(result, dict):
            url = result.get("signedURL") or result.get("signedUrl") or result.get("signed_url")
        if not url:
            raise ProvisioningError(f"Storage returned no signed URL for {path}")
        return url

    def upload_resume(
        self,
        user_id: str,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload a resume for the user and return a signed URL valid for one year.
        The URL is also saved as the profile's resume_link.
        """
        if not user_id:
            raise PreconditionError("user_id is required to upload a resume")
        path = build_resume_path(user_id, filename)
        self._upload_with_provisioning(user_id, path, data, content_type or "application/octet-stream")
        url = self._signed_url(path)
        self.store.update_resume_link(user_id, url)
        logger.info("Uploaded resume for user %s to %s", user_id, path)
        return url
