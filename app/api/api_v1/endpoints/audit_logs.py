from datetime import datetime, timezone
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud import audit as audit_crud
from app.schemas.audit import ActionType, AuditLogListResponse, AuditStats, DateRange
from app.schemas.user import CurrentUser
from app.services import filters

router = APIRouter()

@router.get("/", response_model=AuditLogListResponse)
async def get_audit_logs(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    q: Optional[str] = Query(None, description="Search user, resource id or details"),
    action: Optional[ActionType] = Query(None),
    date_range: DateRange = Query(DateRange.all, alias="range"),
) -> Any:
    """
    The audit trail, newest first, with summary stats over the whole trail.
    """
    logs = await audit_crud.get_audit_logs(supabase)
    if logs is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load audit logs"
        )

    now = datetime.now(timezone.utc)
    items = filters.filter_audit_logs(logs, q, action, date_range, now)
    return AuditLogListResponse(
        items=items,
        total=len(items),
        stats=AuditStats(**filters.audit_stats(logs, now)),
        empty_state=filters.empty_state(items, "logs"),
    )
