"""
Text extraction boundary for uploaded documents.

Turns uploaded bytes into the plain text the classifier consumes. Only
text-based formats are decoded here; binary formats (PDF, DOC, DOCX) are
expected to be extracted upstream, so they, and any decoding failure,
resolve to a placeholder string that the classifier treats as ordinary
(usually GENERAL) input.
"""

import logging
from types import MappingProxyType
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

EXTRACTION_PLACEHOLDER = "Unsupported or error extracting content"

Extractor = Callable[[bytes], str]


def decode_text(data: bytes) -> str:
    """Decode text bytes as UTF-8 (BOM stripped), replacing invalid sequences."""
    return data.decode("utf-8-sig", errors="replace")


EXTRACTORS: Mapping[str, Extractor] = MappingProxyType({
    "text/plain": decode_text,
    "text/markdown": decode_text,
    "text/x-markdown": decode_text,
    "text/csv": decode_text,
})


def extract_text(data: bytes, mime_type: str) -> str:
    """
    Extract plain text from an upload.

    Args:
        data: Raw file bytes
        mime_type: MIME type detected by the file validator

    Returns:
        Extracted text, or EXTRACTION_PLACEHOLDER when the type has no
        extractor, the extractor fails, or it produces no text
    """
    extractor = EXTRACTORS.get((mime_type or "").split(";")[0].strip().lower())
    if extractor is None:
        logger.info("No text extractor for %s, using placeholder", mime_type)
        return EXTRACTION_PLACEHOLDER

    try:
        text = extractor(data)
    except (UnicodeError, ValueError) as e:
        logger.warning("Text extraction failed for %s: %s", mime_type, e)
        return EXTRACTION_PLACEHOLDER

    if not text.strip():
        return EXTRACTION_PLACEHOLDER
    return text
