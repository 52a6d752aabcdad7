"""
Set Superuser Script
Grants or revokes the global superuser flag on a Supabase user.
Needs SUPABASE_SERVICE_ROLE_KEY, since app_metadata is only writable with it.

Usage:
    python -m app.scripts.set_superuser <user_id> [--revoke]
"""

import argparse
import logging
import sys

from app.config import settings
from app.database.supabase_client import SupabaseClient
from app.modules.auth.service import parse_superuser_flag
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def set_superuser(admin_client: Client, user_id: str, is_superuser: bool) -> bool:
    """Write the flag and return the value Supabase reports back"""
    response = admin_client.auth.admin.update_user_by_id(
        user_id,
        {"app_metadata": {"is_superuser": is_superuser}}
    )
    if not response.user:
        raise ValueError(f"User {user_id} not found")
    return parse_superuser_flag(response.user.app_metadata)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Grant or revoke superuser access")
    parser.add_argument("user_id", help="Supabase auth user id")
    parser.add_argument("--revoke", action="store_true", help="Remove the superuser flag instead of setting it")
    args = parser.parse_args(argv)

    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to update app_metadata")
        return 1

    try:
        flag = set_superuser(SupabaseClient.get_service_client(), args.user_id, not args.revoke)
    except Exception as e:
        logger.error(f"Failed to update user {args.user_id}: {e}")
        return 1

    logger.info(f"User {args.user_id} superuser flag is now {flag}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
