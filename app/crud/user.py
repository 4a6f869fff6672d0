from typing import List, Optional
import logging
from postgrest.exceptions import APIError
from supabase import Client
from app.schemas.user import Profile, User, UserRole

logger = logging.getLogger(__name__)

async def get_profile(supabase: Client, user_id: str) -> Optional[Profile]:
    try:
        response = (
            supabase.table("profiles")
            .select("*")
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
    except APIError as e:
        logger.error(f"Database error in get_profile: {e}")
        return None
    if response is None or not response.data:
        return None
    return Profile(**response.data)

def _to_user(row: dict) -> User:
    role = row.get("role")
    return User(
        id=row.get("user_id") or row["id"],
        full_name=row.get("full_name") or "",
        email=row.get("email") or "",
        role=UserRole(role) if role in (r.value for r in UserRole) else None,
        department=row.get("department"),
        avatar_url=row.get("avatar_url"),
    )

async def get_users(supabase: Client) -> Optional[List[User]]:
    """
    All users with their roles, via the get_all_users_with_roles function
    (profiles joined to user_roles, bypassing row-level security).
    """
    try:
        response = supabase.rpc("get_all_users_with_roles", {}).execute()
        return [_to_user(row) for row in response.data or []]
    except APIError as e:
        logger.error(f"Database error in get_users: {e}")
        return None
