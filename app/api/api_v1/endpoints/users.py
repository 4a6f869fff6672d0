from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.crud import user as user_crud
from app.schemas.user import CurrentUser, UserListResponse, UserRole
from app.services import filters

router = APIRouter()

@router.get("/", response_model=UserListResponse)
async def read_users(
    q: Optional[str] = Query(None, description="Search name or email"),
    role: Optional[UserRole] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    Retrieve users with their roles.
    """
    users = await user_crud.get_users(supabase)
    if users is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load users"
        )

    items = filters.filter_users(users, q, role)
    return UserListResponse(
        items=items,
        total=len(items),
        counts=filters.role_counts(users),
        empty_state=filters.empty_state(items, "users"),
    )
