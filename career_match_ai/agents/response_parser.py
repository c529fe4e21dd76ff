"""
Repair and parse the model's recommendation output.

The completion is untrusted free text that usually follows the instructed
format but may be wrapped in a markdown code block, surrounded by prose, or
hold a single object instead of an array. Each repair step below is a
separate function and a no-op when it does not apply. Anything that cannot
be turned into typed records raises ParseError with the original text.
"""

import json
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from career_match_ai.errors import ParseError
from career_match_ai.schemas.recommendation import RecommendationRecord
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w.+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")
_CLOSERS = {"[": "]", "{": "}"}


def strip_whitespace(text: str) -> str:
    return (text or "").strip()


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` (optionally with a language tag) and a trailing ```."""
    if not text.startswith("```"):
        return text
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _match_brackets(text: str, start: int) -> Optional[int]:
    """
    Return the index of the bracket closing text[start], or None if unbalanced.
    Brackets inside JSON strings are ignored.
    """
    stack: List[str] = []
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("]", "}"):
            if not stack or stack.pop() != ch:
                return None
            if not stack:
                return i
    return None


def extract_array_span(text: str) -> str:
    """
    Keep only the first balanced array-of-objects span ('[' whose next
    non-whitespace character is '{'). Returns text unchanged if none is found.
    """
    pos = text.find("[")
    while pos != -1:
        rest = text[pos + 1:].lstrip()
        if rest.startswith("{"):
            end = _match_brackets(text, pos)
            if end is not None:
                return text[pos:end + 1]
        pos = text.find("[", pos + 1)
    return text


def load_json(text: str, raw_text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e.msg}", raw_text) from e


def ensure_list(value: Any, raw_text: str) -> List[Any]:
    """Wrap a single object in a list; reject anything that is not an object or array."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    raise ParseError(f"Response is not an array or object (got {type(value).__name__})", raw_text)


def to_records(items: List[Any], raw_text: str) -> List[RecommendationRecord]:
    """Validate every item; one bad item discards the whole response."""
    records: List[RecommendationRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ParseError(f"Item {index} is not an object", raw_text)
        try:
            records.append(RecommendationRecord.model_validate(item))
        except ValidationError as e:
            raise ParseError(f"Item {index} is not a valid recommendation: {e.error_count()} error(s)", raw_text) from e
    return records


def parse_recommendations(raw: str) -> List[RecommendationRecord]:
    """Run every repair step in order and return the typed records."""
    raw_text = raw if isinstance(raw, str) else ""
    text = strip_whitespace(raw_text)
    text = strip_code_fences(text)
    text = extract_array_span(text)
    value = load_json(text, raw_text)
    items = ensure_list(value, raw_text)
    records = to_records(items, raw_text)
    logger.debug("Parsed %s recommendation(s) from model output", len(records))
    return records
