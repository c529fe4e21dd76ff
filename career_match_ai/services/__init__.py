"""Service exports."""

from .completion_service import CompletionService
from .ocr_service import extract_resume_text
from .recommendation_store import RecommendationStore, StoredProfile
from .resume_storage import ResumeStorage
from .text_cleaner import clean_resume_text

__all__ = [
    "CompletionService",
    "extract_resume_text",
    "RecommendationStore",
    "StoredProfile",
    "ResumeStorage",
    "clean_resume_text",
]
