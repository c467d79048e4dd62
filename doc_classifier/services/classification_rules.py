"""Static pattern tables for the rule-based document classifier.

All patterns are lowercase and run against normalized text (see
``doc_classifier.utils.normalizers.normalize_text``). They are compiled with
``re.ASCII``: only ASCII letters, digits and underscore count as word
characters for ``\\b``. Tables are built once
at import time and exposed as read-only mappings of tuples.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

from doc_classifier.models.classification import DocumentType


@dataclass(frozen=True)
class WeightedPattern:
    """A compiled regex and the score it contributes when it matches."""

    pattern: Pattern[str]
    weight: int


@dataclass(frozen=True)
class Rule:
    """Keyword, field, and counter-evidence patterns for one document type."""

    document_type: DocumentType
    keywords: Tuple[WeightedPattern, ...]
    fields: Tuple[WeightedPattern, ...]
    negatives: Tuple[WeightedPattern, ...] = ()


def _weighted(*pairs: Tuple[str, int]) -> Tuple[WeightedPattern, ...]:
    return tuple(WeightedPattern(re.compile(p, re.ASCII), w) for p, w in pairs)


def _compiled(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.ASCII) for p in patterns)


# ---------------------------------------------------------------------------
# Scoring rules (declaration order is the tie-break order)
# ---------------------------------------------------------------------------

_RULES = (
    Rule(
        document_type=DocumentType.RFQ,
        keywords=_weighted(
            (r"request for quotation|rfq\b", 6),
            (r"bid solicitation|request for proposal|rfp\b", 3),
            (r"quotation due|submission deadline|bid due", 2),
        ),
        fields=_weighted(
            (r"rfq (no\.?|number|#)|rfq id", 4),
            (r"due date|closing date|deadline", 2),
            (r"scope of work|specifications|requirements", 2),
        ),
        negatives=_weighted(
            (r"invoice|purchase order|po\b", 3),
        ),
    ),
    Rule(
        document_type=DocumentType.PO,
        keywords=_weighted(
            (r"purchase order|\bpo\b", 6),
            (r"order confirmation|order date", 2),
        ),
        fields=_weighted(
            (r"po (no\.?|number|#)|po id", 4),
            (r"ship to|ship-to|bill to|bill-to", 2),  # hyphenated forms are already spaces after normalization
            (r"terms and conditions|payment terms|incoterms", 2),
            (r"line items|quantity|unit price|total", 1),
        ),
        negatives=_weighted(
            (r"invoice|quotation|rfq\b", 3),
        ),
    ),
    Rule(
        document_type=DocumentType.INVOICE,
        keywords=_weighted(
            (r"invoice|tax invoice|commercial invoice", 6),
            (r"amount due|balance due|total due", 3),
        ),
        fields=_weighted(
            (r"invoice (no\.?|number|#)|invoice id", 4),
            (r"due date|payment due|terms", 2),
            (r"subtotal|tax|vat|total", 2),
            (r"bill to|ship to", 1),
        ),
        negatives=_weighted(
            (r"purchase order|\bpo\b|rfq\b|quotation", 3),
        ),
    ),
    Rule(
        document_type=DocumentType.QUOTATION,
        keywords=_weighted(
            (r"quotation|quote\b|price quote", 6),
            (r"valid until|quote validity|validity period", 2),
        ),
        fields=_weighted(
            (r"quotation (no\.?|number|#)|quote id", 4),
            (r"unit price|pricing|rate", 2),
            (r"subtotal|tax|vat|total amount|grand total", 1),
        ),
        negatives=_weighted(
            (r"invoice|purchase order|\bpo\b|rfq\b", 3),
        ),
    ),
)

RULES: Mapping[DocumentType, Rule] = MappingProxyType(
    {rule.document_type: rule for rule in _RULES}
)

# ---------------------------------------------------------------------------
# Gate patterns
# ---------------------------------------------------------------------------

# Document-number fields, characteristic headers, date/terms fields.
REQUIRED_SIGNALS: Mapping[DocumentType, Tuple[Pattern[str], ...]] = MappingProxyType({
    DocumentType.RFQ: _compiled(
        r"request for quotation|rfq\b",
        r"rfq (no\.?|number|#)|rfq id",
        r"due date|closing date|deadline",
        r"scope of work|specifications|requirements",
    ),
    DocumentType.PO: _compiled(
        r"purchase order|\bpo\b",
        r"po (no\.?|number|#)|po id",
        r"ship to|ship-to|bill to|bill-to",  # hyphenated forms are already spaces after normalization
        r"terms and conditions|payment terms|incoterms",
        r"line items|quantity|unit price|total amount|grand total|subtotal|tax|vat",
    ),
    DocumentType.INVOICE: _compiled(
        r"invoice|tax invoice|commercial invoice",
        r"invoice (no\.?|number|#)|invoice id",
        r"amount due|balance due|total due",
        r"subtotal|tax|vat|total amount|grand total",
    ),
    DocumentType.QUOTATION: _compiled(
        r"quotation|quote\b|price quote",
        r"quotation (no\.?|number|#)|quote id",
        r"valid until|quote validity|validity period",
        r"unit price|pricing|rate",
        r"subtotal|tax|vat|total amount|grand total",
    ),
    DocumentType.GENERAL: (),
})

# Matched against the header region only.
HEADER_SIGNALS: Mapping[DocumentType, Tuple[Pattern[str], ...]] = MappingProxyType({
    DocumentType.RFQ: _compiled(r"request for quotation|rfq\b"),
    DocumentType.PO: _compiled(r"purchase order|\bpo\b"),
    DocumentType.INVOICE: _compiled(r"invoice|tax invoice|commercial invoice"),
    DocumentType.QUOTATION: _compiled(r"quotation|price quote|\bquote\b"),
    DocumentType.GENERAL: (),
})

# Reports, roadmaps, and design docs rather than transactions.
GENERAL_INDICATORS: Tuple[Pattern[str], ...] = _compiled(
    r"roadmap|progress report|status report|technical report|executive summary",
    r"overview|introduction|architecture|specification|design doc|proposal summary",
    r"milestone|deliverable|timeline|sprint|release notes|changelog",
)

TRANSACTIONAL_SIGNALS: Tuple[Pattern[str], ...] = _compiled(
    r"\b(invoice|purchase order|rfq|quotation)\b",
    r"\b(no\.?|number|id|#)\b",
    r"\bline items?|quantity|unit price\b",
    r"\bamount due|balance due|total amount|grand total|subtotal|tax|vat\b",
    r"\bship to|bill to\b",
    r"\bvalid until|due date|payment terms\b",
    r"\b(usd|eur|gbp|ngn|cad|aud)\b",
    r"[$€£₦]",
)

# Extra tag suggested for the top-scoring type when its score is strong.
TYPE_TAGS: Mapping[DocumentType, str] = MappingProxyType({
    DocumentType.PO: "Purchase",
    DocumentType.RFQ: "Sourcing",
    DocumentType.INVOICE: "Accounts Payable",
    DocumentType.QUOTATION: "Pricing",
})
