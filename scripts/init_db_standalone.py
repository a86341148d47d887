import asyncio
import logging
import sys
import os

# Add project root to sys.path to allow imports from portfolio
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

async def main():
    load_dotenv()
    from portfolio.core.config import settings
    from portfolio.db.engine import init_db

    database_url = settings.DATABASE_URL
    db_type = "SQLite" if "sqlite" in database_url else "PostgreSQL"

    logger.info(f"Initializing {db_type} database...")
    logger.info(f"   URL: {database_url.split('@')[-1] if '@' in database_url else 'local'}")

    try:
        await init_db()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Operation cancelled.")
