#!/usr/bin/env python3
"""
Sign in as a user and report what the CMS thinks of them: profile, role and
whether they would get the admin screens. Also lists every admin row in
user_roles, which is handy after running bootstrap_admin.py.
"""
import argparse
import asyncio
import getpass
import logging
import sys

from app.core.auth_context import AuthContext
from app.core.supabase import get_anon_client, get_supabase_client
from app.schemas.user import UserRole
from app.utils.logging import log_error

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def list_admins() -> list:
    response = (
        get_supabase_client()
        .table("user_roles")
        .select("user_id, role, profiles(email, full_name, department)")
        .eq("role", UserRole.admin.value)
        .execute()
    )
    return response.data or []


async def check(email: str, password: str) -> int:
    async with AuthContext(get_anon_client()) as auth:
        error = await auth.sign_in(email, password)
        if error:
            log_error(error, context=f"Sign-in failed for {email}")
            return 1

        # Profile and role arrive on the next loop tick
        await asyncio.sleep(0)

        print(f"User ID:    {auth.user.id if auth.user else 'N/A'}")
        print(f"Name:       {auth.profile.full_name if auth.profile else 'N/A'}")
        print(f"Department: {auth.profile.department if auth.profile else 'N/A'}")
        print(f"Role:       {auth.role.value if auth.role else 'none'}")
        print(f"Admin:      {'yes' if auth.is_admin else 'no'}")

        await auth.sign_out()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Check a user's CMS access")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument("--list-admins", action="store_true")
    args = parser.parse_args()

    if args.list_admins:
        admins = list_admins()
        if not admins:
            print("No admin users found in user_roles")
        for index, row in enumerate(admins, start=1):
            profile = row.get("profiles") or {}
            print(f"{index}. {row['user_id']}  {profile.get('email', 'N/A')}  {profile.get('full_name', 'N/A')}")

    password = args.password or getpass.getpass("Password: ")
    return asyncio.run(check(args.email, password))


if __name__ == "__main__":
    sys.exit(main())
