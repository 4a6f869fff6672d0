from datetime import datetime, timezone
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from supabase import Client
import logging
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud import advisory as advisory_crud
from app.crud import audit as audit_crud
from app.schemas.advisory import (
    AdvisoryBoard,
    AdvisoryCard,
    AdvisoryCreate,
    AdvisoryListResponse,
    AdvisoryRequest,
    AdvisoryStatus,
)
from app.schemas.audit import ActionType
from app.schemas.user import CurrentUser
from app.services import filters

logger = logging.getLogger(__name__)
router = APIRouter()

async def _load_requests(supabase: Client) -> List[AdvisoryRequest]:
    requests = await advisory_crud.get_advisory_requests(supabase)
    if requests is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load advisory requests"
        )
    return requests

@router.post("/", response_model=AdvisoryRequest, status_code=status.HTTP_201_CREATED)
async def create_advisory_request(
    *,
    request: Request,
    request_in: AdvisoryCreate,
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    created = await advisory_crud.create_advisory_request(supabase, request_in)
    if not created:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create advisory request"
        )

    await audit_crud.record_event(
        supabase,
        action=ActionType.create,
        resource="advisory",
        resource_id=created.request_number or created.id,
        user_id=current_user.id,
        user_name=current_user.email or "",
        ip_address=request.client.host if request.client else None,
        details=f'Created advisory request "{created.title}"',
    )
    logger.info(f"Advisory request created: {created.id}")
    return created

@router.get("/", response_model=AdvisoryListResponse)
async def get_advisory_requests(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    q: Optional[str] = Query(None, description="Search title, request number or requester"),
    status_filter: Optional[AdvisoryStatus] = Query(None, alias="status"),
) -> Any:
    requests = await _load_requests(supabase)
    items = filters.filter_advisory(requests, q, status_filter)
    return AdvisoryListResponse(
        items=items,
        total=len(items),
        empty_state=filters.empty_state(items, "advisory requests"),
    )

@router.get("/board", response_model=AdvisoryBoard)
async def get_advisory_board(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    q: Optional[str] = Query(None),
    status_filter: Optional[AdvisoryStatus] = Query(None, alias="status"),
) -> Any:
    """
    Advisory requests grouped by status with days left until due.
    """
    requests = await _load_requests(supabase)
    items = filters.filter_advisory(requests, q, status_filter)
    now = datetime.now(timezone.utc)
    columns = {
        column: [
            AdvisoryCard(request=r, days_remaining=filters.days_remaining(r.due_date, now))
            for r in grouped
        ]
        for column, grouped in filters.group_advisory(items).items()
    }
    return AdvisoryBoard(
        columns=columns,
        total=len(items),
        empty_state=filters.empty_state(items, "advisory requests"),
    )
