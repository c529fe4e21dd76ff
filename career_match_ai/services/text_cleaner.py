"""Clean and normalize OCR markdown into resume text for the prompt."""

import re
import unicodedata
from typing import Iterable, Optional

from career_match_ai.config import MAX_RESUME_CHARS

PAGE_SEPARATOR = "\n\n"
TRUNCATION_MARKER = "\n\n[Content truncated.]"


def join_pages(pages: Iterable[Optional[str]]) -> str:
    """Concatenate page markdown in page order, separated by a blank line."""
    return PAGE_SEPARATOR.join(page for page in pages if page)


def clean_resume_text(text: str, max_chars: int = MAX_RESUME_CHARS) -> str:
    """
    Normalize unicode (NFC), collapse runs of spaces and blank lines, and truncate
    to at most max_chars (marker included).
    Returns an empty string for blank input.
    """
    if not text or not text.strip():
        return ""

    t = unicodedata.normalize("NFC", text)
    # OCR markdown embeds page images as ![img-0.jpeg](img-0.jpeg); they carry no text
    t = re.sub(r"!\[[^\]]*\]\([^)]*\)", "", t)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()

    if len(t) > max_chars:
        # The marker counts towards max_chars so the result never exceeds it
        t = t[:max(max_chars - len(TRUNCATION_MARKER), 0)] + TRUNCATION_MARKER
    return t
