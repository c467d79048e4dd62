"""
Document classification API endpoints.

Provides endpoints for classifying raw text, uploaded files, and batches.
Every endpoint is a thin shell over ``classify_document``; the classifier
never raises, so the only error responses come from request validation.
"""

import logging
from collections import Counter

from fastapi import APIRouter, File, Request, Response, UploadFile, status

from doc_classifier.middleware.rate_limit import (
    batch_limit,
    classify_limit,
    get_limiter,
    upload_limit,
)
from doc_classifier.models.classification import (
    BatchClassifyRequest,
    BatchClassifyResponse,
    ClassificationResult,
    ClassifyRequest,
    DocumentType,
    UploadClassificationResult,
)
from doc_classifier.services.document_classifier import classify_document
from doc_classifier.services.file_validator import validate_upload
from doc_classifier.services.text_extractor import extract_text

router = APIRouter(prefix="/api", tags=["classification"])
limiter = get_limiter()
logger = logging.getLogger(__name__)


def _set_outcome_headers(response: Response, result: ClassificationResult) -> None:
    # Read by RequestLoggingMiddleware
    response.headers["X-Doc-Type"] = result.document_type.value
    response.headers["X-Confidence"] = f"{result.confidence:.4f}"


@router.post("/classify", response_model=ClassificationResult, status_code=status.HTTP_200_OK)
@limiter.limit(classify_limit)  # type: ignore[untyped-decorator]
async def classify_text(
    request: Request,
    response: Response,
    payload: ClassifyRequest,
) -> ClassificationResult:
    """
    Classify already-extracted text.

    Returns:
        200: ClassificationResult (camelCase keys)
        422: Malformed request body
        429: Rate limit exceeded
    """
    result = classify_document(payload.file_name, payload.content)
    _set_outcome_headers(response, result)
    return result


@router.post(
    "/classify/upload",
    response_model=UploadClassificationResult,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(upload_limit)  # type: ignore[untyped-decorator]
async def classify_upload(
    request: Request,
    response: Response,
    file: UploadFile = File(..., description="Document to classify (PDF, DOC, DOCX or text)"),
) -> UploadClassificationResult:
    """
    Validate an uploaded file, extract its text, and classify it.

    Binary formats without an extractor are classified from the filename
    plus a placeholder text, which normally resolves to GENERAL.

    Returns:
        200: UploadClassificationResult
        400: Empty file or unsupported MIME type
        413: File too large
        429: Rate limit exceeded
    """
    content, file_hash, file_name, mime_type = await validate_upload(file)

    text = extract_text(content, mime_type)
    result = classify_document(file_name, text)

    logger.info(
        "Classified upload %s (%s, %d bytes) as %s",
        file_name, mime_type, len(content), result.document_type.value,
    )

    _set_outcome_headers(response, result)
    return UploadClassificationResult(
        **result.model_dump(),
        file_name=file_name,
        file_hash=file_hash,
        mime_type=mime_type,
    )


@router.post(
    "/classify/batch",
    response_model=BatchClassifyResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(batch_limit)  # type: ignore[untyped-decorator]
async def classify_batch(
    request: Request,
    payload: BatchClassifyRequest,
) -> BatchClassifyResponse:
    """
    Classify up to 50 documents in request order.

    Returns:
        200: BatchClassifyResponse with results and per-type counts
        422: Empty batch, more than 50 documents, or malformed body
        429: Rate limit exceeded
    """
    results = [classify_document(doc.file_name, doc.content) for doc in payload.documents]

    tally = Counter(result.document_type for result in results)
    counts = {doc_type.value: tally.get(doc_type, 0) for doc_type in DocumentType}

    return BatchClassifyResponse(results=results, counts=counts)
