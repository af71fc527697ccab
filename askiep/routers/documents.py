"""Documents and analysis routers."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from askiep.core.deps import get_ai_gateway, get_db, get_owner_key
from askiep.schemas.analysis import AnalysisRead, AnalyzeRequest, DocumentRead
from askiep.services import analysis_service, document_service, profile_service
from askiep.services.ai_gateway import AIGateway

router = APIRouter(tags=["documents"])


@router.get("/documents/{child_id}", response_model=list[DocumentRead])
def list_documents(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    """List a child's documents, newest first. Content is not included."""
    if not profile_service.get_child(db, owner_key, child_id):
        return []
    return document_service.list_documents(db, child_id)


@router.get("/analysis/latest/{child_id}", response_model=AnalysisRead | None)
def get_latest_analysis(
    child_id: UUID,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
):
    if not profile_service.get_child(db, owner_key, child_id):
        return None
    return analysis_service.get_latest_analysis(db, child_id)


@router.post("/analyze", response_model=AnalysisRead, status_code=201)
def analyze(
    data: AnalyzeRequest,
    owner_key: str = Depends(get_owner_key),
    db: Session = Depends(get_db),
    gateway: AIGateway | None = Depends(get_ai_gateway),
):
    """
    Analyze IEP text and store the analysis with its document.

    When the body carries a precomputed ``analysis`` the model is not called.
    """
    profile_service.require_child(db, owner_key, data.child_id)
    analysis, _document = analysis_service.run_analysis(db, data, gateway)
    return analysis
