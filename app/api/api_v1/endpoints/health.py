from fastapi import APIRouter, Depends
from supabase import Client
import logging
from app.core.config import settings
from app.core.supabase import get_supabase_client

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("")
async def health_check(supabase: Client = Depends(get_supabase_client)):
    """
    Liveness plus a one-row read from profiles to prove PostgREST answers.
    """
    try:
        supabase.table("profiles").select("id").limit(1).execute()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check could not reach the database: {e}")
        db_status = f"error: {str(e)}"

    return {
        "status": "ok",
        "version": settings.VERSION,
        "database": db_status
    }
