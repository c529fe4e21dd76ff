"""Mistral OCR service: turn a resume document URL into plain text."""

from typing import Any, Optional

import httpx

from career_match_ai.config import HTTP_TIMEOUT_SECONDS, OCR_API_URL, OCR_MODEL
from career_match_ai.errors import ExtractionError, PreconditionError
from career_match_ai.services.text_cleaner import clean_resume_text, join_pages
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def build_ocr_payload(document_url: str) -> dict[str, Any]:
    return {
        "model": OCR_MODEL,
        "document": {
            "type": "document_url",
            "document_url": document_url,
        },
        "include_image_base64": True,
    }


def _error_message(response: httpx.Response) -> str:
    """Prefer the service's own message; fall back to the HTTP reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
        if isinstance(message, (dict, list)):
            return str(message)
    return response.reason_phrase or f"HTTP {response.status_code}"


def pages_to_text(data: Any) -> str:
    """Join every page's markdown (in page order) from an OCR response body."""
    if not isinstance(data, dict):
        raise ExtractionError("OCR extraction failed: response is not a JSON object")
    pages = data.get("pages") or []
    if not isinstance(pages, list):
        raise ExtractionError("OCR extraction failed: 'pages' is not a list")
    return join_pages(
        p.get("markdown") if isinstance(p, dict) and isinstance(p.get("markdown"), str) else ""
        for p in pages
    )


async def extract_resume_text(
    document_url: str,
    api_key: str,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Run OCR on the whole document and return its text (possibly empty).
    Missing URL or API key is rejected before any network call.
    Any non-success response or transport failure raises ExtractionError.
    """
    if not document_url:
        raise PreconditionError("Document URL is required")
    if not api_key:
        raise PreconditionError("OCR API key is required")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = build_ocr_payload(document_url)

    try:
        if client is not None:
            response = await client.post(OCR_API_URL, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as owned:
                response = await owned.post(OCR_API_URL, json=payload, headers=headers)
    except httpx.TimeoutException as e:
        raise ExtractionError(f"OCR extraction timed out: {e}") from e
    except httpx.HTTPError as e:
        raise ExtractionError(f"OCR request failed: {e}") from e

    if response.is_error:
        message = _error_message(response)
        logger.error("OCR HTTP error: %s %s", response.status_code, message)
        raise ExtractionError(f"OCR extraction failed: {message}", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise ExtractionError("OCR extraction failed: response is not valid JSON") from e

    text = clean_resume_text(pages_to_text(data))
    logger.info("OCR extracted %s characters from %s page(s)", len(text), len(data.get("pages") or []))
    return text
