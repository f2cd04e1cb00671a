"""
Housekeeping script for CareRelay
Run this periodically to drop expired blacklist entries and unused upload slots
"""
import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.db.database import AsyncSessionLocal
from app.db.crud.token import delete_expired_blacklisted_tokens
from app.db.crud.branding import delete_stale_upload_slots
from loguru import logger


async def run_cleanup():
    """Run cleanup process"""
    logger.info("Starting cleanup process...")

    async with AsyncSessionLocal() as db:
        stats = {
            "blacklisted_tokens": await delete_expired_blacklisted_tokens(db),
            "upload_slots": await delete_stale_upload_slots(db),
        }
    logger.info(f"Cleanup completed: {stats}")
    return stats


if __name__ == "__main__":
    asyncio.run(run_cleanup())
