"""
User administration: create, update and delete accounts, and bootstrap the
first administrator.

An account spans three places: the Supabase Auth user, its row in
`profiles` and its row in `user_roles`. Creating one is a short saga; each
step that leaves something behind registers how to undo it, and a failure
further down unwinds the completed steps in reverse. Undoing the Auth user
is enough to undo the whole account, because deleting it cascades to the
dependent rows.
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from fastapi import HTTPException, status
from supabase import Client

from app.core.config import settings
from app.crud import audit as audit_crud
from app.schemas.audit import ActionType
from app.schemas.user import (
    BootstrapAdminRequest,
    CreateUserRequest,
    CurrentUser,
    DeleteUserRequest,
    UpdateUserRequest,
    UserRole,
)

logger = logging.getLogger(__name__)

VALID_ROLES = [r.value for r in UserRole]
INVALID_ROLE_MESSAGE = "Invalid role. Must be 'admin' or 'legal_officer'"


class SagaStepError(Exception):
    def __init__(self, step: str, cause: Exception):
        super().__init__(f"{step}: {cause}")
        self.step = step
        self.cause = cause


class Saga:
    """
    Runs steps in order and remembers their compensations.

    Compensation failures are not retried. They are handed to
    on_rollback_failure as (step name, step result, exception).
    """

    def __init__(
        self,
        name: str,
        on_rollback_failure: Optional[Callable[[str, Any, Exception], Awaitable[None]]] = None,
    ):
        self.name = name
        self._on_rollback_failure = on_rollback_failure
        self._compensations: List[Tuple[str, Any, Callable[[Any], Any]]] = []

    async def run(
        self,
        step: str,
        action: Callable[[], Any],
        compensate: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        try:
            result = action()
        except Exception as e:
            logger.error(f"{self.name}: step '{step}' failed: {e}")
            await self.rollback()
            raise SagaStepError(step, e) from e

        if compensate is not None:
            self._compensations.append((step, result, compensate))
        return result

    async def rollback(self) -> None:
        while self._compensations:
            step, result, undo = self._compensations.pop()
            try:
                undo(result)
                logger.info(f"{self.name}: rolled back '{step}'")
            except Exception as e:
                logger.error(f"{self.name}: rollback of '{step}' failed: {e}")
                if self._on_rollback_failure is not None:
                    await self._on_rollback_failure(step, result, e)


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _error_message(e: Exception) -> str:
    return getattr(e, "message", None) or str(e)


def _check_password(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise _bad_request(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )


def _fetch_profile(supabase: Client, user_id: str) -> Optional[dict]:
    try:
        response = (
            supabase.table("profiles")
            .select("email, full_name")
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        logger.error(f"Error fetching profile for {user_id}: {e}")
        return None
    return response.data if response is not None else None


async def _provision_account(
    supabase: Client,
    *,
    email: str,
    password: str,
    full_name: str,
    role: str,
    department: str,
    actor: Optional[CurrentUser],
    role_error: str = "Failed to assign user role",
) -> str:
    """Create the Auth user, profile and role rows. Returns the new user id."""

    async def record_orphan(step: str, user_id: Any, error: Exception) -> None:
        logger.error(
            f"Auth user {user_id} ({email}) could not be removed after a failed "
            f"signup and is now orphaned: {error}"
        )
        await audit_crud.record_event(
            supabase,
            action=ActionType.delete,
            resource="user",
            resource_id=str(user_id),
            user_id=actor.id if actor else None,
            user_name=(actor.email or "") if actor else "system",
            details=f"Cleanup of '{step}' failed for {email}: {_error_message(error)}",
        )

    saga = Saga(f"provision {email}", on_rollback_failure=record_orphan)

    def create_auth_user() -> str:
        response = supabase.auth.admin.create_user({
            "email": email,
            "password": password,
            "email_confirm": True,
        })
        return response.user.id

    try:
        user_id = await saga.run(
            "create auth user",
            create_auth_user,
            compensate=lambda uid: supabase.auth.admin.delete_user(uid),
        )
    except SagaStepError as e:
        raise _bad_request(_error_message(e.cause))

    # No compensation of their own: removing the Auth user cascades to both rows
    try:
        await saga.run(
            "insert profile",
            lambda: supabase.table("profiles").insert({
                "id": user_id,
                "user_id": user_id,
                "full_name": full_name,
                "email": email,
                "department": department,
            }).execute(),
        )
    except SagaStepError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user profile"
        )

    try:
        await saga.run(
            "assign role",
            lambda: supabase.table("user_roles").insert({
                "user_id": user_id,
                "role": role,
            }).execute(),
        )
    except SagaStepError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=role_error
        )

    return user_id


async def create_user(supabase: Client, payload: CreateUserRequest, actor: CurrentUser) -> dict:
    if not payload.email or not payload.password or not payload.full_name or not payload.role:
        raise _bad_request("Missing required fields: email, password, fullName, role")
    if payload.role not in VALID_ROLES:
        raise _bad_request(INVALID_ROLE_MESSAGE)
    _check_password(payload.password)

    department = payload.department or settings.DEFAULT_DEPARTMENT
    user_id = await _provision_account(
        supabase,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=payload.role,
        department=department,
        actor=actor,
    )

    logger.info(f"User created successfully: {payload.email} ({payload.role}) by {actor.id}")
    return {
        "success": True,
        "message": "User created successfully",
        "user": {
            "id": user_id,
            "email": payload.email,
            "fullName": payload.full_name,
            "role": payload.role,
            "department": department,
        },
    }


async def update_user(supabase: Client, payload: UpdateUserRequest, actor: CurrentUser) -> dict:
    if not payload.user_id:
        raise _bad_request("Missing required field: userId")
    if payload.role and payload.role not in VALID_ROLES:
        raise _bad_request(INVALID_ROLE_MESSAGE)

    existing = _fetch_profile(supabase, payload.user_id)
    if not existing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if payload.full_name or payload.department:
        changes = {}
        if payload.full_name:
            changes["full_name"] = payload.full_name
        if payload.department:
            changes["department"] = payload.department
        try:
            supabase.table("profiles").update(changes).eq("user_id", payload.user_id).execute()
        except Exception as e:
            logger.error(f"Error updating profile: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update user profile"
            )

    if payload.role:
        # One upsert keyed on user_id: the user is never left without a role row
        try:
            supabase.table("user_roles").upsert(
                {"user_id": payload.user_id, "role": payload.role},
                on_conflict="user_id",
            ).execute()
        except Exception as e:
            logger.error(f"Error updating role: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update user role"
            )

    logger.info(f"User updated successfully: {existing['email']} by {actor.id}")
    return {
        "success": True,
        "message": "User updated successfully",
        "user": {
            "id": payload.user_id,
            "email": existing["email"],
            "fullName": payload.full_name or existing.get("full_name"),
            "department": payload.department,
            "role": payload.role,
        },
    }


async def delete_user(supabase: Client, payload: DeleteUserRequest, actor: CurrentUser) -> dict:
    if not payload.user_id:
        raise _bad_request("Missing required field: userId")
    if payload.user_id == actor.id:
        raise _bad_request("You cannot delete your own account")

    target = _fetch_profile(supabase, payload.user_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # profiles and user_roles rows go with the Auth user via ON DELETE CASCADE
    try:
        supabase.auth.admin.delete_user(payload.user_id)
    except Exception as e:
        logger.error(f"Error deleting user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=_error_message(e)
        )

    logger.info(f"User deleted successfully: {target['email']} ({target.get('full_name')})")
    return {
        "success": True,
        "message": "User deleted successfully",
        "deletedUser": {
            "id": payload.user_id,
            "email": target["email"],
            "fullName": target.get("full_name"),
        },
    }


def admin_exists(supabase: Client) -> bool:
    response = (
        supabase.table("user_roles")
        .select("id")
        .eq("role", UserRole.admin.value)
        .limit(1)
        .execute()
    )
    return bool(response.data)


async def bootstrap_admin(supabase: Client, payload: BootstrapAdminRequest) -> dict:
    """
    Create the very first administrator. Refuses once any admin exists, so
    it needs no caller identity.
    """
    try:
        exists = admin_exists(supabase)
    except Exception as e:
        logger.error(f"Error checking for existing admins: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check existing admins"
        )
    if exists:
        raise _bad_request("An admin account already exists. Use the normal login flow.")

    if not payload.email or not payload.password or not payload.full_name:
        raise _bad_request("Missing required fields: email, password, fullName")
    _check_password(payload.password)

    user_id = await _provision_account(
        supabase,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=UserRole.admin.value,
        department=settings.DEFAULT_DEPARTMENT,
        actor=None,
        role_error="Failed to assign admin role",
    )

    logger.info(f"Bootstrap admin created successfully: {payload.email}")
    return {
        "success": True,
        "message": "First admin account created successfully",
        "user": {
            "id": user_id,
            "email": payload.email,
            "fullName": payload.full_name,
            "role": UserRole.admin.value,
        },
    }
