from datetime import datetime, timezone
from typing import List, Optional
import logging
from postgrest.exceptions import APIError
from supabase import Client
from app.schemas.audit import ActionType, AuditLog

logger = logging.getLogger(__name__)

TABLE = "audit_logs"

# PostgREST caps each response (1000 rows by default), so read in pages
PAGE_SIZE = 1000

async def get_audit_logs(supabase: Client, page_size: int = PAGE_SIZE) -> Optional[List[AuditLog]]:
    """
    The whole audit trail, newest first. None on database error.
    """
    logs: List[AuditLog] = []
    try:
        while True:
            start = len(logs)
            response = (
                supabase.table(TABLE)
                .select("*")
                .order("timestamp", desc=True)
                .range(start, start + page_size - 1)
                .execute()
            )
            rows = response.data or []
            logs.extend(AuditLog(**row) for row in rows)
            if len(rows) < page_size:
                return logs
    except APIError as e:
        logger.error(f"Database error in get_audit_logs: {e}")
        return None

async def record_event(
    supabase: Client,
    *,
    action: ActionType,
    resource: str,
    resource_id: str,
    user_id: Optional[str] = None,
    user_name: str = "",
    ip_address: Optional[str] = None,
    details: str = "",
) -> bool:
    """
    Append an entry to the audit trail.

    Best effort: a failed write is logged and reported as False, never
    raised, so auditing cannot fail the operation being audited.
    """
    entry = {
        "user_id": user_id,
        "user_name": user_name,
        "action": action.value,
        "resource": resource,
        "resource_id": resource_id,
        "ip_address": ip_address,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        supabase.table(TABLE).insert(entry).execute()
        return True
    except Exception as e:
        logger.error(f"Failed to write audit log for {resource} {resource_id}: {e}")
        return False
