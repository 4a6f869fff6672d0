from datetime import date, datetime, timezone
from typing import List, Any, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path, Request
from supabase import Client
import logging
from app.core.auth import get_current_user
from app.core.config import settings
from app.core.supabase import get_supabase_client
from app.crud import audit as audit_crud
from app.crud import case as case_crud
from app.schemas.audit import ActionType
from app.schemas.case import Case, CaseCreate, CaseListResponse, ProceduralStage, UrgentHearing
from app.schemas.user import CurrentUser
from app.services import filters

logger = logging.getLogger(__name__)
router = APIRouter()

async def _load_cases(supabase: Client) -> List[Case]:
    cases = await case_crud.get_cases(supabase)
    if cases is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load cases"
        )
    return cases

@router.post("/", response_model=Case, status_code=status.HTTP_201_CREATED)
async def create_case(
    *,
    request: Request,
    case_in: CaseCreate,
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    Add a case to the litigation registry.
    """
    logger.info(f"Case creation requested by user: {current_user.id}")

    existing = await case_crud.get_case_by_suit_number(supabase, case_in.suit_number)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"A case with suit number {case_in.suit_number} already exists"
        )

    new_case = await case_crud.create_case(supabase, case_in)
    if not new_case:
        logger.error("Failed to create case")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create case"
        )

    await audit_crud.record_event(
        supabase,
        action=ActionType.create,
        resource="case",
        resource_id=new_case.suit_number,
        user_id=current_user.id,
        user_name=current_user.email or "",
        ip_address=request.client.host if request.client else None,
        details=f"Created case {new_case.suit_number}: {new_case.case_title}",
    )
    logger.info(f"Case created successfully: {new_case.id}")
    return new_case

@router.get("/", response_model=CaseListResponse)
async def get_cases(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    q: Optional[str] = Query(None, description="Search suit number, title, adversary or counsel"),
    stage: Optional[ProceduralStage] = Query(None, description="Filter by procedural stage"),
) -> Any:
    """
    Retrieve the litigation registry with optional search and stage filter.
    """
    cases = await _load_cases(supabase)
    items = filters.filter_cases(cases, q, stage)
    logger.info(f"Retrieved {len(items)} of {len(cases)} cases")
    return CaseListResponse(
        items=items,
        total=len(items),
        empty_state=filters.empty_state(items, "cases"),
    )

@router.get("/upcoming", response_model=List[Case])
async def get_upcoming_hearings(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    limit: int = Query(5, ge=1, le=50),
) -> Any:
    """
    Next hearings for the court calendar, soonest first.
    """
    cases = await _load_cases(supabase)
    return filters.upcoming_hearings(cases, limit=limit, include_now=True)

@router.get("/urgent", response_model=List[UrgentHearing])
async def get_urgent_hearings(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    """
    Hearings inside the risk window, with time remaining.
    """
    cases = await _load_cases(supabase)
    now = datetime.now(timezone.utc)
    return [
        UrgentHearing(case=c, time_remaining=filters.format_time_remaining(c.next_hearing, now))
        for c in filters.urgent_hearings(cases, now, settings.URGENT_HEARING_WINDOW_HOURS)
    ]

@router.get("/calendar", response_model=List[Case])
async def get_hearings_on(
    *,
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
    day: date = Query(..., description="Calendar day, YYYY-MM-DD"),
) -> Any:
    cases = await _load_cases(supabase)
    return filters.hearings_on(cases, day)

@router.get("/{case_id}", response_model=Case)
async def read_case(
    *,
    supabase: Client = Depends(get_supabase_client),
    case_id: str = Path(..., description="The ID of the case to retrieve"),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    """
    Get case by ID.
    """
    case = await case_crud.get_case(supabase, case_id)
    if not case:
        logger.warning(f"Case not found: {case_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Case not found"
        )
    return case
