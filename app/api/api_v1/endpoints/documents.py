from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from supabase import Client
import logging
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud import audit as audit_crud
from app.crud import case as case_crud
from app.crud import document as document_crud
from app.schemas.audit import ActionType
from app.schemas.document import Document, DocumentCreate, DocumentListResponse, DocumentType
from app.schemas.user import CurrentUser
from app.services import filters

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(
    *,
    request: Request,
    document_in: DocumentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    Register a document in the vault (metadata only).
    """
    if document_in.case_id and not await case_crud.get_case(supabase, document_in.case_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Related case not found"
        )
    if not document_in.uploaded_by:
        document_in.uploaded_by = current_user.email or ""

    document = await document_crud.create_document(supabase, document_in)
    if not document:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create document"
        )

    await audit_crud.record_event(
        supabase,
        action=ActionType.create,
        resource="document",
        resource_id=document.id,
        user_id=current_user.id,
        user_name=current_user.email or "",
        ip_address=request.client.host if request.client else None,
        details=f'Uploaded "{document.name}" ({document.type.value})',
    )
    logger.info(f"Document created: {document.id}")
    return document

@router.get("/", response_model=DocumentListResponse)
async def get_documents(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    q: Optional[str] = Query(None, description="Search name or uploader"),
    doc_type: Optional[DocumentType] = Query(None, alias="type"),
    case_id: Optional[str] = Query(None),
) -> Any:
    documents = await document_crud.get_documents(supabase, case_id=case_id)
    if documents is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load documents"
        )
    items = filters.filter_documents(documents, q, doc_type)
    return DocumentListResponse(
        items=items,
        total=len(items),
        type_counts=filters.document_type_counts(documents),
        empty_state=filters.empty_state(items, "documents"),
    )

@router.get("/{document_id}", response_model=Document)
async def read_document(
    *,
    supabase: Client = Depends(get_supabase_client),
    document_id: str = Path(...),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    document = await document_crud.get_document(supabase, document_id)
    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )
    return document
