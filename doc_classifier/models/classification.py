"""Pydantic models for document classification results.

Used by the rule-based classifier to report whether a document is an RFQ,
purchase order, quotation, invoice, or a general business document.
Field aliases are camelCase so the REST layer serialises the same shape the
document repository stores as file metadata.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """Document categories the classifier can assign."""

    RFQ = "RFQ"
    PO = "PO"
    QUOTATION = "QUOTATION"
    INVOICE = "INVOICE"
    GENERAL = "GENERAL"


class CamelModel(BaseModel):
    """Base model that accepts snake_case names and emits camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class ClassificationResult(CamelModel):
    """Result of classifying one document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    document_type: DocumentType = Field(
        alias="documentType",
        description="Classified document type"
    )
    summary: str = Field(
        max_length=200,
        description="Whitespace-collapsed excerpt of the content (max 200 chars)"
    )
    suggested_tags: List[str] = Field(
        default_factory=list,
        alias="suggestedTags",
        description="Deduplicated tags, document type first"
    )
    confidence: float = Field(
        ge=0.0, le=1.0,
        description="Relative dominance of the top score (0.0 to 0.99)"
    )
    signals: Dict[str, int] = Field(
        default_factory=dict,
        description="Raw clamped score per candidate type"
    )


class ClassifyRequest(CamelModel):
    """Raw text submitted for classification."""

    file_name: str = Field(
        default="",
        alias="fileName",
        description="Original filename; contributes to matching"
    )
    content: str = Field(
        default="",
        description="Extracted plain text of the document"
    )


class BatchClassifyRequest(CamelModel):
    """Several documents classified in one call."""

    documents: List[ClassifyRequest] = Field(
        min_length=1,
        max_length=50,
        description="Documents to classify (1 to 50)"
    )


class UploadClassificationResult(ClassificationResult):
    """Classification of an uploaded file, with the upload's identity."""

    file_name: str = Field(alias="fileName", description="Sanitized filename")
    file_hash: str = Field(alias="fileHash", description="SHA-256 of the upload")
    mime_type: str = Field(alias="mimeType", description="Detected MIME type")


class BatchClassifyResponse(CamelModel):
    """Results for a batch, in request order, with per-type counts."""

    results: List[ClassificationResult]
    counts: Dict[str, int] = Field(
        default_factory=dict,
        description="Number of documents assigned to each type"
    )
