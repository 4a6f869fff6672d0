"""
Privileged user-administration functions.

These keep the request/response contract of the Supabase edge
functions: camelCase JSON bodies, `{success, ...}` on 200 and `{error}`
otherwise.

Bodies are read inside the handlers rather than declared as parameters.
FastAPI parses declared bodies before resolving dependencies, and the
caller must be authorized before anything they sent is looked at.
"""

from json import JSONDecodeError
from typing import Any, Awaitable, Type, TypeVar
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from supabase import Client
from app.core.auth import require_admin
from app.core.supabase import get_supabase_client
from app.schemas.user import (
    BootstrapAdminRequest,
    CreateUserRequest,
    CurrentUser,
    DeleteUserRequest,
    UpdateUserRequest,
)
from app.services import provisioning

logger = logging.getLogger(__name__)
router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)

async def _read_body(request: Request, model: Type[BodyT]) -> BodyT:
    try:
        data = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON body"
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

async def _run(name: str, call: Awaitable[dict]) -> dict:
    try:
        return await call
    except HTTPException:
        raise
    except Exception:
        logger.exception(f"Unexpected error in {name}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

@router.post("/create-user")
async def create_user(
    request: Request,
    current_user: CurrentUser = Depends(require_admin("create")),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    Create an account: Auth user, profile and role. Admins only.
    """
    payload = await _read_body(request, CreateUserRequest)
    return await _run("create-user", provisioning.create_user(supabase, payload, current_user))

@router.post("/update-user")
async def update_user(
    request: Request,
    current_user: CurrentUser = Depends(require_admin("update")),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    payload = await _read_body(request, UpdateUserRequest)
    return await _run("update-user", provisioning.update_user(supabase, payload, current_user))

@router.post("/delete-user")
async def delete_user(
    request: Request,
    current_user: CurrentUser = Depends(require_admin("delete")),
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    payload = await _read_body(request, DeleteUserRequest)
    return await _run("delete-user", provisioning.delete_user(supabase, payload, current_user))

@router.post("/bootstrap-admin")
async def bootstrap_admin(
    request: Request,
    supabase: Client = Depends(get_supabase_client),
) -> Any:
    """
    One-time creation of the first administrator.
    """
    payload = await _read_body(request, BootstrapAdminRequest)
    return await _run("bootstrap-admin", provisioning.bootstrap_admin(supabase, payload))
