"""Seed an admin user, or promote an existing account to admin"""
import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from powerfolio.database import AsyncSessionLocal, close_db
from powerfolio.models.user import UserRole
from powerfolio.services.user_service import UserService
from powerfolio.core.logging_config import setup_logging

logger = setup_logging("powerfolio.seed_admin", log_file="seed_admin.log")


async def create_admin(name: str, email: str, password: str):
    """Create admin user"""
    try:
        async with AsyncSessionLocal() as db:
            users = UserService(db)
            existing = await users.find_by_email(email)

            if existing:
                if existing.role == UserRole.ADMIN:
                    logger.warning(f"Admin with email {email} already exists!")
                    return
                existing.role = UserRole.ADMIN
                await db.commit()
                logger.info(f"Promoted existing user to admin: {email}")
                return

            await users.create_user(name=name, email=email, password=password, role=UserRole.ADMIN)
            logger.info(f"Admin user created successfully: {email}")
    except Exception as e:
        logger.error(f"Failed to create admin user: {e}", exc_info=True)
        raise
    finally:
        await close_db()


async def main():
    """Main function"""
    if len(sys.argv) < 4:
        logger.error("Usage: python scripts/seed_admin.py <name> <email> <password>")
        sys.exit(1)

    name, email, password = sys.argv[1], sys.argv[2], sys.argv[3]

    logger.info(f"Creating admin user: {email}")
    await create_admin(name, email, password)


if __name__ == "__main__":
    asyncio.run(main())
