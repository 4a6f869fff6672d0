from typing import Optional
from fastapi import Depends, Header, HTTPException, status
import logging
from supabase import Client
from app.core.supabase import get_supabase_client
from app.schemas.user import CurrentUser, UserRole

logger = logging.getLogger(__name__)

def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """
    Pull the bearer token out of the Authorization header.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()

def lookup_role(supabase: Client, user_id: str) -> Optional[UserRole]:
    """
    Resolve a user's role through the get_user_role database function.

    The call goes through the service-role client, so the answer comes from
    user_roles and never from claims the caller supplied. Lookup failures
    are logged and reported as "no role".
    """
    try:
        response = supabase.rpc("get_user_role", {"user_id": user_id}).execute()
    except Exception as e:
        logger.error(f"Role lookup failed for user {user_id}: {e}")
        return None

    if not response.data:
        return None
    try:
        return UserRole(response.data)
    except ValueError:
        logger.warning(f"User {user_id} has unknown role {response.data!r}")
        return None

async def get_current_user(
    token: str = Depends(get_bearer_token),
    supabase: Client = Depends(get_supabase_client),
) -> CurrentUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        response = supabase.auth.get_user(token)
    except Exception as e:
        if "timeout" in str(e).lower():
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail="Authentication service timeout. Please try again."
            )
        logger.warning(f"Supabase authentication error: {e}")
        raise credentials_exception

    if not response or not response.user:
        raise credentials_exception

    auth_user = response.user
    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        role=lookup_role(supabase, auth_user.id),
    )

def require_admin(action: str):
    """
    Dependency factory for the user-administration functions.

    Args:
        action: Verb used in the rejection message, e.g. "create"
    """
    def check_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role != UserRole.admin:
            logger.warning(
                f"Unauthorized attempt to {action} users by user: {current_user.id}, role: {current_user.role}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only administrators can {action} users"
            )
        return current_user
    return check_admin
