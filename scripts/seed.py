#!/usr/bin/env python3
# =============================================================================
# scripts/seed.py - Demo Data Seeder
# =============================================================================
# Inserts the demo users into the users table. Safe to run repeatedly:
# users whose email already exists are left untouched.
#
# Usage:
#   python scripts/seed.py
#
# Prerequisites:
#   - Environment variables must be set (.env file)
#   - The users table must exist
# =============================================================================

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from lib.repository import Repository

DEMO_USERS = [
    {"email": "alice@example.com", "name": "Alice"},
    {"email": "bob@example.com", "name": "Bob"},
]


async def seed_users(repository: Repository, users: list[dict] | None = None) -> int:
    """
    Create each user unless one with the same email exists.

    Returns:
        Number of users created
    """
    created = 0
    for user in users or DEMO_USERS:
        if await repository.find_unique({"email": user["email"]}) is None:
            await repository.create({**user, "is_active": True})
            created += 1
    return created


async def run() -> int:
    from app.config import settings
    from lib.supabase_client import SupabaseRepository

    repository = SupabaseRepository(settings.USERS_TABLE)
    await repository.connect()
    try:
        return await seed_users(repository)
    finally:
        await repository.disconnect()


def main():
    """Seed the demo users."""
    created = asyncio.run(run())
    print(f"Seed done ({created} user(s) created)")


if __name__ == "__main__":
    main()
