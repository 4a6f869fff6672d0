from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4
import logging
from postgrest.exceptions import APIError
from supabase import Client
from app.schemas.advisory import AdvisoryCreate, AdvisoryRequest

logger = logging.getLogger(__name__)

TABLE = "advisory_requests"

def generate_request_number(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"ADV-{now:%Y%m%d}-{uuid4().hex[:6].upper()}"

async def get_advisory_requests(supabase: Client) -> Optional[List[AdvisoryRequest]]:
    try:
        response = supabase.table(TABLE).select("*").order("date_received", desc=True).execute()
        return [AdvisoryRequest(**row) for row in response.data]
    except APIError as e:
        logger.error(f"Database error in get_advisory_requests: {e}")
        return None

async def create_advisory_request(supabase: Client, request_in: AdvisoryCreate) -> Optional[AdvisoryRequest]:
    data = request_in.model_dump(mode="json")
    now = datetime.now(timezone.utc)
    if not data.get("request_number"):
        data["request_number"] = generate_request_number(now)
    if not data.get("date_received"):
        data["date_received"] = now.isoformat()

    try:
        response = supabase.table(TABLE).insert(data).execute()
    except APIError as e:
        logger.error(f"Database error in create_advisory_request: {e}")
        return None
    if not response.data:
        return None
    return AdvisoryRequest(**response.data[0])
