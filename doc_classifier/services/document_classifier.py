"""Rule-based document classifier.

Decides whether a document is an RFQ, purchase order, quotation, invoice, or
a general document without calling any external service:

1. Normalize ``filename + content`` and take the header region
2. Score every rule (keywords + fields - negatives, clamped at 0)
3. Rank scores and gate the top type on structural evidence
4. Build summary and tags

Anything that fails a gate falls back to GENERAL.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Pattern, Tuple

from doc_classifier.models.classification import ClassificationResult, DocumentType
from doc_classifier.services.classification_rules import (
    GENERAL_INDICATORS,
    HEADER_SIGNALS,
    REQUIRED_SIGNALS,
    RULES,
    TRANSACTIONAL_SIGNALS,
    TYPE_TAGS,
    Rule,
)
from doc_classifier.utils.normalizers import (
    header_region,
    normalize_text,
    summarize,
    unique_tags,
)

logger = logging.getLogger(__name__)

MAX_CONFIDENCE = 0.99
BASE_THRESHOLD = 5
STRICT_THRESHOLD = 7
STRONG_SCORE = 7
TAG_SCORE = 5


@dataclass(frozen=True)
class GateReport:
    """Evidence counts and gate outcomes for the top-ranked type."""

    candidate: DocumentType
    top_score: int
    required_match_count: int
    header_match_count: int
    general_hit_count: int
    transactional_hit_count: int
    passes_required_gate: bool
    passes_threshold: bool
    passes_header_gate: bool

    @property
    def looks_like_general(self) -> bool:
        return self.general_hit_count >= 2

    @property
    def accepted(self) -> bool:
        return self.passes_required_gate and self.passes_threshold and self.passes_header_gate


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def count_matches(text: str, patterns: Iterable[Pattern[str]]) -> int:
    """Number of patterns that match anywhere in text."""
    return sum(1 for pattern in patterns if pattern.search(text))


def compute_score(text: str, rule: Rule) -> int:
    """Sum of matching keyword and field weights minus negatives, floored at 0."""
    score = 0
    for signal in rule.keywords + rule.fields:
        if signal.pattern.search(text):
            score += signal.weight
    for signal in rule.negatives:
        if signal.pattern.search(text):
            score -= signal.weight
    return max(score, 0)


def score_document(text: str) -> Dict[str, int]:
    """Score normalized text against every rule, in declaration order."""
    return {doc_type.value: compute_score(text, rule) for doc_type, rule in RULES.items()}


def rank_scores(scores: Dict[str, int]) -> List[Tuple[str, int]]:
    """Sort scores descending; equal scores keep declaration order."""
    return sorted(scores.items(), key=lambda item: item[1], reverse=True)


def compute_confidence(top_score: int, second_score: int) -> float:
    """How far the top score dominates the runner-up, capped at 0.99."""
    if top_score == 0:
        return 0.0
    return min(MAX_CONFIDENCE, top_score / (top_score + second_score + 1))


# ---------------------------------------------------------------------------
# Gating
# ---------------------------------------------------------------------------

def evaluate_gates(text: str, header: str, candidate: DocumentType, top_score: int) -> GateReport:
    """Collect the structural evidence needed to accept ``candidate``."""
    required_match_count = count_matches(text, REQUIRED_SIGNALS.get(candidate, ()))
    header_match_count = count_matches(header, HEADER_SIGNALS.get(candidate, ()))
    general_hit_count = count_matches(text, GENERAL_INDICATORS)
    transactional_hit_count = count_matches(text, TRANSACTIONAL_SIGNALS)

    # Two required signals, or one backed by a header hit or a strong score
    passes_required_gate = (
        required_match_count >= 2
        or (required_match_count >= 1 and header_match_count >= 1)
        or (required_match_count >= 1 and top_score >= STRONG_SCORE)
    )

    threshold = STRICT_THRESHOLD if general_hit_count >= 2 else BASE_THRESHOLD
    passes_threshold = top_score >= threshold

    passes_header_gate = header_match_count >= 1 or transactional_hit_count >= 2

    return GateReport(
        candidate=candidate,
        top_score=top_score,
        required_match_count=required_match_count,
        header_match_count=header_match_count,
        general_hit_count=general_hit_count,
        transactional_hit_count=transactional_hit_count,
        passes_required_gate=passes_required_gate,
        passes_threshold=passes_threshold,
        passes_header_gate=passes_header_gate,
    )


def decide_document_type(report: GateReport) -> DocumentType:
    """Accept the candidate only if every gate passes."""
    if not report.accepted:
        return DocumentType.GENERAL

    # Reports that merely mention a "quote" are not quotations.
    if (
        report.candidate is DocumentType.QUOTATION
        and report.looks_like_general
        and report.header_match_count == 0
        and report.transactional_hit_count == 0
    ):
        return DocumentType.GENERAL

    return report.candidate


def suggest_tags(document_type: DocumentType, top_type: DocumentType, top_score: int) -> List[str]:
    tags = [document_type.value]
    if top_score >= TAG_SCORE:
        tags.append(TYPE_TAGS.get(top_type, ""))
    return unique_tags(tags)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

def analyze_document(file_name: str, content: str) -> Tuple[ClassificationResult, GateReport]:
    """Classify a document and return the gate report alongside the result."""
    text = normalize_text(f"{file_name or ''} {content or ''}")
    header = header_region(text)

    scores = score_document(text)
    ranked = rank_scores(scores)
    top_type = DocumentType(ranked[0][0])
    top_score = ranked[0][1]
    second_score = ranked[1][1] if len(ranked) > 1 else 0

    report = evaluate_gates(text, header, top_type, top_score)
    document_type = decide_document_type(report)

    logger.debug(
        "Classified %r as %s (candidate=%s score=%d required=%d header=%d general=%d transactional=%d)",
        file_name,
        document_type.value,
        top_type.value,
        top_score,
        report.required_match_count,
        report.header_match_count,
        report.general_hit_count,
        report.transactional_hit_count,
    )

    result = ClassificationResult(
        document_type=document_type,
        summary=summarize(content),
        suggested_tags=suggest_tags(document_type, top_type, top_score),
        confidence=compute_confidence(top_score, second_score),
        signals=scores,
    )
    return result, report


def classify_document(file_name: str, content: str) -> ClassificationResult:
    """Classify a document from its filename and extracted text.

    Args:
        file_name: Original filename; matched together with the content.
        content: Plain text supplied by the extraction layer. Extraction
            failures arrive as placeholder text and are classified like any
            other input.

    Returns:
        ClassificationResult with document type, summary, tags, confidence,
        and raw per-type scores. Insufficient evidence yields GENERAL.
    """
    result, _ = analyze_document(file_name, content)
    return result
