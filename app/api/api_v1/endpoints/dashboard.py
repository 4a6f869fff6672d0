from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud import advisory as advisory_crud
from app.crud import case as case_crud
from app.schemas.dashboard import DashboardResponse
from app.schemas.user import CurrentUser
from app.services.dashboard import build_dashboard

router = APIRouter()

@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    supabase: Client = Depends(get_supabase_client),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    cases = await case_crud.get_cases(supabase)
    requests = await advisory_crud.get_advisory_requests(supabase)
    if cases is None or requests is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load dashboard data"
        )
    return build_dashboard(cases, requests)
