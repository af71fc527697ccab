"""Analysis service - AI breakdown of IEP text, stored with its source document."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from askiep.core.async_utils import run_async
from askiep.core.config import settings
from askiep.core.errors import InfrastructureError, ValidationError
from askiep.db.models import IepAnalysis, IepDocument
from askiep.schemas.analysis import AnalyzeRequest
from askiep.services import document_service
from askiep.services.ai_gateway import AIGateway
from askiep.services.ai_prompt_schemas import IepAnalysisOutput

logger = logging.getLogger(__name__)


def get_latest_analysis(db: Session, child_id: UUID) -> IepAnalysis | None:
    """Most recent analysis for a child."""
    return db.query(IepAnalysis).filter(
        IepAnalysis.child_id == child_id,
    ).order_by(IepAnalysis.created_at.desc()).first()


def _check_length(text: str) -> str:
    text = text.strip()
    if not text:
        raise ValidationError("Document text is required")
    if len(text) > settings.MAX_DOCUMENT_CHARS:
        raise ValidationError(
            "Document is too long to analyze",
            details={"max_chars": settings.MAX_DOCUMENT_CHARS, "chars": len(text)},
        )
    return text


def run_analysis(
    db: Session,
    data: AnalyzeRequest,
    gateway: AIGateway | None,
) -> tuple[IepAnalysis, IepDocument]:
    """
    Analyze a document and persist the analysis plus the document.

    A precomputed ``data.analysis`` is stored as-is (already schema-validated
    on the way in). Otherwise the model is called first; any AI failure
    propagates before anything is written, so a failed analysis leaves no rows.
    """
    text = _check_length(data.text)

    if data.analysis is not None:
        output = data.analysis
    else:
        if gateway is None:
            raise InfrastructureError("AI service is not configured")
        output = run_async(gateway.analyze_iep(text))

    return store_analysis(db, data.child_id, text, output, filename=data.filename)


def store_analysis(
    db: Session,
    child_id: UUID,
    text: str,
    output: IepAnalysisOutput,
    *,
    filename: str | None = None,
) -> tuple[IepAnalysis, IepDocument]:
    """Write the analysis and its document in a single commit."""
    analysis = IepAnalysis(
        child_id=child_id,
        summary=output.summary,
        goals=list(output.goals),
        accommodations=list(output.accommodations),
        red_flags=list(output.red_flags),
        legal_lens=output.legal_lens,
        service_grid=(
            [row.model_dump() for row in output.service_grid]
            if output.service_grid is not None
            else None
        ),
    )
    db.add(analysis)
    db.flush()

    document = document_service.build_document(
        child_id, text, filename=filename, analysis_id=analysis.id
    )
    db.add(document)
    db.commit()
    db.refresh(analysis)
    db.refresh(document)

    logger.info(
        "Stored IEP analysis",
        extra={"child_id": str(child_id), "analysis_id": str(analysis.id)},
    )
    return analysis, document
