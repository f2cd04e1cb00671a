"""
Create a supervisor account for CareRelay
"""
import asyncio
import sys
from pathlib import Path
import getpass

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.db.database import AsyncSessionLocal, init_db
from app.db.crud.user import create_user_db, get_user_by_email
from app.db.crud.profile import upsert_profile
from app.db.models import Role
from app.auth.security import Hasher
from app.utils.helpers import sanitize_email
from loguru import logger


async def create_supervisor():
    """Create a user with a supervisor profile interactively"""
    logger.info("Creating supervisor account for CareRelay...")

    email = sanitize_email(input("Enter supervisor email: "))
    if not email:
        logger.error("Email is required")
        return

    name = input("Enter display name: ").strip()
    if not name:
        logger.error("Display name is required")
        return

    department = input("Enter department (optional): ").strip() or None

    password = getpass.getpass("Enter password: ")
    if not password:
        logger.error("Password is required")
        return

    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        logger.error("Passwords don't match")
        return

    await init_db()

    async with AsyncSessionLocal() as db:
        existing_user = await get_user_by_email(db, email)
        if existing_user:
            logger.warning(f"User {email} already exists")
            return

        user = await create_user_db(db, {
            "email": email,
            "hashed_password": Hasher.get_password_hash(password),
            "is_active": True
        })
        profile = await upsert_profile(db, user, {
            "role": Role.SUPERVISOR,
            "name": name,
            "department": department,
        })
        logger.info(f"Supervisor created: {user.email} as {profile.name} (user ID: {user.id})")


if __name__ == "__main__":
    asyncio.run(create_supervisor())
