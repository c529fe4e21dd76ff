"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
COMPLETION_API_KEY: str = os.getenv("COMPLETION_API_KEY") or os.getenv("AZURE_INFERENCE_SDK_KEY", "")
SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

# Remote services
OCR_API_URL: str = os.getenv("OCR_API_URL", "https://api.mistral.ai/v1/ocr")
OCR_MODEL: str = os.getenv("OCR_MODEL", "mistral-ocr-latest")
COMPLETION_ENDPOINT: str = os.getenv("COMPLETION_ENDPOINT") or os.getenv("AZURE_INFERENCE_SDK_ENDPOINT", "")
DEPLOYMENT_NAME: str = os.getenv("DEPLOYMENT_NAME", "Phi-4")
SUPABASE_URL: str = os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL", "")

# Storage
RESUME_BUCKET: str = os.getenv("RESUME_BUCKET", "resumes")
SIGNED_URL_TTL_SECONDS: int = 31536000  # 1 year

# HTTP / model call settings
HTTP_TIMEOUT_SECONDS: float = 60.0
MAX_COMPLETION_TOKENS: int = 1500

# Recommendation limits
RECOMMENDATION_COUNT: int = 3  # Batch size asked from the model and read back from cache
MAX_RESUME_CHARS: int = 20000

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
