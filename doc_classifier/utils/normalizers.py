"""Normalize raw document text for rule matching, summaries and tags."""

import re
from typing import Iterable, List

HEADER_LENGTH = 120
SUMMARY_MAX_LENGTH = 200
SUMMARY_PLACEHOLDER = "Summary unavailable."

_WHITESPACE_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile(r"[_\-]+")


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space."""
    return _WHITESPACE_RE.sub(" ", text or "")


def normalize_text(text: str) -> str:
    """Collapse whitespace, turn underscores/hyphens into spaces, lowercase.

    Patterns in the rule tables are written in lowercase, so every match runs
    against the output of this function.
    """
    return _SEPARATOR_RE.sub(" ", collapse_whitespace(text)).lower()


def header_region(normalized: str) -> str:
    """First 120 characters of normalized text, a stand-in for the title block."""
    return normalized[:HEADER_LENGTH]


def summarize(content: str) -> str:
    """Whitespace-collapsed excerpt of content, ellipsis-truncated to 200 chars."""
    cleaned = collapse_whitespace(content).strip()
    if not cleaned:
        return SUMMARY_PLACEHOLDER
    if len(cleaned) > SUMMARY_MAX_LENGTH:
        return cleaned[:SUMMARY_MAX_LENGTH - 3] + "..."
    return cleaned


def unique_tags(tags: Iterable[str]) -> List[str]:
    """Drop empty and repeated tags, keeping first-seen order."""
    return [tag for tag in dict.fromkeys(tags) if tag]
