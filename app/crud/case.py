from typing import List, Optional
import logging
from postgrest.exceptions import APIError
from supabase import Client
from app.schemas.case import Case, CaseCreate

logger = logging.getLogger(__name__)

TABLE = "litigation_cases"

async def get_case(supabase: Client, case_id: str) -> Optional[Case]:
    try:
        response = supabase.table(TABLE).select("*").eq("id", case_id).maybe_single().execute()
    except APIError as e:
        logger.error(f"Database error in get_case: {e}")
        return None
    if response is None or not response.data:
        return None
    return Case(**response.data)

async def get_case_by_suit_number(supabase: Client, suit_number: str) -> Optional[Case]:
    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("suit_number", suit_number)
            .maybe_single()
            .execute()
        )
    except APIError as e:
        logger.error(f"Database error in get_case_by_suit_number: {e}")
        return None
    if response is None or not response.data:
        return None
    return Case(**response.data)

async def get_cases(supabase: Client) -> Optional[List[Case]]:
    """
    Get every case, most recently filed first. None on database error.
    """
    try:
        response = supabase.table(TABLE).select("*").order("filed_date", desc=True).execute()
        return [Case(**row) for row in response.data]
    except APIError as e:
        logger.error(f"Database error in get_cases: {e}")
        return None

async def create_case(supabase: Client, case_in: CaseCreate) -> Optional[Case]:
    try:
        response = supabase.table(TABLE).insert(case_in.model_dump(mode="json")).execute()
    except APIError as e:
        logger.error(f"Database error in create_case: {e}")
        return None
    if not response.data:
        return None
    return Case(**response.data[0])
