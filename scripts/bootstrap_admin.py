#!/usr/bin/env python3
"""
Create the first administrator account through the bootstrap-admin function.

Only works while no admin exists; afterwards admins are created from the
user management screen.
"""
import argparse
import getpass
import logging
import sys

import httpx

from app.core.config import settings
from app.utils.logging import log_error, log_info

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)


def bootstrap_admin(base_url: str, email: str, password: str, full_name: str) -> dict:
    response = httpx.post(
        f"{base_url.rstrip('/')}{settings.FUNCTIONS_PREFIX}/bootstrap-admin",
        headers={"Authorization": f"Bearer {settings.SUPABASE_SERVICE_ROLE_KEY}"},
        json={"email": email, "password": password, "fullName": full_name},
        timeout=30,
    )
    data = response.json()
    if response.status_code != 200:
        raise RuntimeError(data.get("error", f"HTTP {response.status_code}"))
    return data


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the first LASU Legal CMS admin")
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL of the API")
    parser.add_argument("--email", required=True)
    parser.add_argument("--full-name", default="LASU Legal Admin")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    try:
        data = bootstrap_admin(args.url, args.email, password, args.full_name)
    except (httpx.HTTPError, RuntimeError) as e:
        log_error(e, context="Bootstrap failed")
        return 1

    log_info(f"{data['message']} ({data['user']['email']})", context="Bootstrap")
    return 0


if __name__ == "__main__":
    sys.exit(main())
