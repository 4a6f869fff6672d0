from typing import Any
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client
from app.core.auth import get_bearer_token, get_current_user
from app.core.supabase import get_anon_client, get_supabase_client
from app.crud import user as user_crud
from app.schemas.auth import SessionInfo, Token, UserLogin
from app.schemas.user import CurrentUser, UserRole

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    supabase: Client = Depends(get_anon_client),
) -> Any:
    """
    Login using Supabase Auth.
    """
    try:
        auth_response = supabase.auth.sign_in_with_password({
            "email": credentials.email,
            "password": credentials.password
        })
    except Exception as e:
        logger.info(f"Failed login for {credentials.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "access_token": auth_response.session.access_token,
        "token_type": "bearer",
        "refresh_token": auth_response.session.refresh_token
    }

@router.post("/logout")
async def logout(
    token: str = Depends(get_bearer_token),
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Revoke the caller's session.
    """
    try:
        supabase.auth.admin.sign_out(token)
    except Exception as e:
        logger.error(f"Logout failed for user {current_user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Logout failed"
        )
    return {"message": "Successfully logged out"}

@router.get("/me", response_model=SessionInfo)
async def read_session(
    current_user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    Profile and role of the signed-in user.
    """
    profile = await user_crud.get_profile(supabase, current_user.id)
    return SessionInfo(
        user_id=current_user.id,
        email=current_user.email,
        profile=profile,
        role=current_user.role,
        is_admin=current_user.role == UserRole.admin,
    )
