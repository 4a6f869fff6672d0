"""
Client-side mirror of the Supabase session.

AuthContext tracks who is signed in on a supabase client, together with
that user's profile row and role. It is an explicit object with a lifecycle:
start() subscribes to auth state changes and clears any stale session, and
close() drops the subscription. Scripts and anything else acting as an end
user hold one of these instead of poking at global state.
"""

import asyncio
import logging
from typing import Any, Optional

from supabase import Client

from app.schemas.user import Profile, UserRole

logger = logging.getLogger(__name__)


class AuthContextError(Exception):
    """Sign-in failure, normalized to a plain message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthContext:
    def __init__(self, client: Client):
        self._client = client
        self._subscription = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self.session: Any = None
        self.user: Any = None
        self.profile: Optional[Profile] = None
        self.role: Optional[UserRole] = None
        self.is_loading = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    async def start(self) -> "AuthContext":
        """
        Subscribe to auth state changes, then sign out whatever session the
        client restored so that every run starts with an explicit login.
        """
        self._loop = asyncio.get_running_loop()
        self._subscription = self._client.auth.on_auth_state_change(self._on_auth_state_change)
        try:
            self._client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Could not clear existing session: {e}")
        self.is_loading = False
        return self

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._loop = None

    async def __aenter__(self) -> "AuthContext":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def sign_in(self, email: str, password: str) -> Optional[AuthContextError]:
        try:
            self._client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            return AuthContextError(getattr(e, "message", None) or str(e))
        return None

    async def sign_out(self) -> None:
        self._client.auth.sign_out()
        self._clear()

    def _on_auth_state_change(self, event: str, session: Any) -> None:
        self.session = session
        self.user = session.user if session is not None else None

        if self.user is not None:
            self._schedule_fetch(self.user.id)
        else:
            self._clear_user_data()

        if event == "SIGNED_OUT":
            self._clear_user_data()

        self.is_loading = False

    def _schedule_fetch(self, user_id: str) -> None:
        # The callback runs while the auth client holds its internal lock;
        # querying from here would re-enter it. Defer to the next loop tick.
        if self._loop is None:
            logger.warning("Auth state changed before start(); skipping profile fetch")
            return
        self._loop.call_soon(self.fetch_user_data, user_id)

    def fetch_user_data(self, user_id: str) -> None:
        """
        Load the profile and role for user_id. Errors are logged, not raised.
        A failed profile read keeps whatever profile was already loaded.
        """
        profile = None
        profile_failed = False
        try:
            response = (
                self._client.table("profiles")
                .select("*")
                .eq("user_id", user_id)
                .maybe_single()
                .execute()
            )
            if response is not None and response.data:
                profile = Profile(**response.data)
        except Exception as e:
            logger.error(f"Error fetching profile: {e}")
            profile_failed = True

        role = None
        try:
            response = self._client.rpc("get_user_role", {"user_id": user_id}).execute()
            if response.data:
                role = UserRole(response.data)
        except Exception as e:
            logger.error(f"Error fetching role: {e}")

        # The user may have signed out while the fetch was queued
        if self.user is None or self.user.id != user_id:
            return
        if not profile_failed:
            self.profile = profile
        self.role = role

    def _clear_user_data(self) -> None:
        self.profile = None
        self.role = None

    def _clear(self) -> None:
        self.user = None
        self.session = None
        self._clear_user_data()
