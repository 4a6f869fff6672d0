from datetime import datetime, timezone
from typing import List, Optional
import logging
from postgrest.exceptions import APIError
from supabase import Client
from app.schemas.document import Document, DocumentCreate

logger = logging.getLogger(__name__)

TABLE = "legal_documents"

async def get_document(supabase: Client, document_id: str) -> Optional[Document]:
    try:
        response = supabase.table(TABLE).select("*").eq("id", document_id).maybe_single().execute()
    except APIError as e:
        logger.error(f"Database error in get_document: {e}")
        return None
    if response is None or not response.data:
        return None
    return Document(**response.data)

async def get_documents(supabase: Client, case_id: Optional[str] = None) -> Optional[List[Document]]:
    try:
        query = supabase.table(TABLE).select("*")
        if case_id:
            query = query.eq("case_id", case_id)
        response = query.order("last_modified", desc=True).execute()
        return [Document(**row) for row in response.data]
    except APIError as e:
        logger.error(f"Database error in get_documents: {e}")
        return None

async def create_document(supabase: Client, document_in: DocumentCreate) -> Optional[Document]:
    """
    Record document metadata. The file itself is not stored anywhere.
    """
    now = datetime.now(timezone.utc).isoformat()
    data = document_in.model_dump(mode="json")
    data["uploaded_at"] = now
    data["last_modified"] = now

    try:
        response = supabase.table(TABLE).insert(data).execute()
    except APIError as e:
        logger.error(f"Database error in create_document: {e}")
        return None
    if not response.data:
        return None
    return Document(**response.data[0])
