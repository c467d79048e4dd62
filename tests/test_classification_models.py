"""Tests for classification Pydantic models."""

import pytest
from pydantic import ValidationError

from doc_classifier.models.classification import (
    BatchClassifyRequest,
    ClassificationResult,
    ClassifyRequest,
    DocumentType,
    UploadClassificationResult,
)


class TestDocumentType:
    """DocumentType enum values."""

    def test_values_match_names(self):
        assert [t.value for t in DocumentType] == ["RFQ", "PO", "QUOTATION", "INVOICE", "GENERAL"]

    def test_is_string(self):
        assert DocumentType.INVOICE == "INVOICE"


class TestClassificationResult:
    """ClassificationResult validation and serialization."""

    def test_serializes_with_camel_case_aliases(self):
        result = ClassificationResult(
            document_type=DocumentType.PO,
            summary="Purchase Order 12",
            suggested_tags=["PO", "Purchase"],
            confidence=0.9,
            signals={"RFQ": 0, "PO": 9, "INVOICE": 0, "QUOTATION": 0},
        )

        data = result.model_dump(mode="json", by_alias=True)

        assert data["documentType"] == "PO"
        assert data["suggestedTags"] == ["PO", "Purchase"]
        assert data["confidence"] == 0.9
        assert data["signals"]["PO"] == 9

    def test_accepts_aliases(self):
        result = ClassificationResult(
            documentType="GENERAL",
            summary="",
            suggestedTags=["GENERAL"],
            confidence=0,
        )
        assert result.document_type == DocumentType.GENERAL
        assert result.signals == {}

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            ClassificationResult(document_type="PO", summary="", confidence=1.5)
        with pytest.raises(ValidationError):
            ClassificationResult(document_type="PO", summary="", confidence=-0.1)

    def test_summary_max_length(self):
        with pytest.raises(ValidationError):
            ClassificationResult(document_type="PO", summary="x" * 201, confidence=0.5)

    def test_unknown_document_type_rejected(self):
        with pytest.raises(ValidationError):
            ClassificationResult(document_type="RECEIPT", summary="", confidence=0.5)

    def test_upload_result_extends_result(self):
        result = UploadClassificationResult(
            document_type=DocumentType.INVOICE,
            summary="Invoice",
            suggested_tags=["INVOICE"],
            confidence=0.5,
            file_name="inv.txt",
            file_hash="abc",
            mime_type="text/plain",
        )
        data = result.model_dump(by_alias=True)
        assert data["fileName"] == "inv.txt"
        assert data["fileHash"] == "abc"
        assert data["mimeType"] == "text/plain"


class TestRequests:
    """Request model defaults and limits."""

    def test_classify_request_defaults(self):
        request = ClassifyRequest()
        assert request.file_name == ""
        assert request.content == ""

    def test_classify_request_from_json_aliases(self):
        request = ClassifyRequest.model_validate({"fileName": "po.pdf", "content": "PO"})
        assert request.file_name == "po.pdf"

    def test_batch_requires_at_least_one_document(self):
        with pytest.raises(ValidationError):
            BatchClassifyRequest(documents=[])

    def test_batch_limited_to_fifty_documents(self):
        with pytest.raises(ValidationError):
            BatchClassifyRequest(documents=[ClassifyRequest()] * 51)
        assert len(BatchClassifyRequest(documents=[ClassifyRequest()] * 50).documents) == 50
