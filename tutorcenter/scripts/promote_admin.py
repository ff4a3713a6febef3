"""
Promote Admin Script
Gives an existing account the administrator role and makes sure every
profile has an auth_settings row. Meant for bootstrapping a fresh project,
since only an administrator can assign roles through the API.

    python -m tutorcenter.scripts.promote_admin someone@example.com
"""

import argparse
import logging
import sys
from typing import Optional

from supabase import Client

from tutorcenter.config.permissions_config import UserRole
from tutorcenter.database.supabase_client import get_service_supabase

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def find_user_id(supabase: Client, email: str) -> Optional[str]:
    """Look up an auth user id by email"""
    for user in supabase.auth.admin.list_users():
        if (getattr(user, "email", None) or "").lower() == email.lower():
            return user.id
    return None


def promote_admin(supabase: Client, email: str) -> bool:
    user_id = find_user_id(supabase, email)
    if not user_id:
        logger.error(f"No account with email {email}")
        return False

    result = supabase.table("user_profiles")\
        .update({"role": UserRole.ADMINISTRATOR.value, "is_active": True})\
        .eq("user_id", user_id)\
        .execute()
    if not result.data:
        logger.error(f"Account {email} has no profile row")
        return False

    logger.info(f"Promoted {email} to {UserRole.ADMINISTRATOR.value}")
    return True


def seed_auth_settings(supabase: Client) -> int:
    """Create missing auth_settings rows with default values"""
    profiles = supabase.table("user_profiles").select("user_id").execute().data or []
    existing = supabase.table("auth_settings").select("user_id").execute().data or []
    known = {row["user_id"] for row in existing}

    created_count = 0
    for profile in profiles:
        if profile["user_id"] in known:
            continue
        try:
            supabase.table("auth_settings").insert({"user_id": profile["user_id"]}).execute()
            created_count += 1
        except Exception as e:
            logger.error(f"Error creating auth settings for {profile['user_id']}: {e}")

    logger.info(f"Auth settings seeded: {created_count} created")
    return created_count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Promote an account to administrator")
    parser.add_argument("email")
    parser.add_argument("--skip-auth-settings", action="store_true",
                        help="do not create missing auth_settings rows")
    args = parser.parse_args(argv)

    supabase = get_service_supabase()
    if not promote_admin(supabase, args.email):
        return 1
    if not args.skip_auth_settings:
        seed_auth_settings(supabase)
    return 0


if __name__ == "__main__":
    sys.exit(main())
