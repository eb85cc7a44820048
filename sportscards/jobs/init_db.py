"""
Create the document tables.

Run this job once against a new database before starting the app.
"""

import asyncio
import logging

from sportscards.db.database import init_db

logger = logging.getLogger(__name__)


async def run_init() -> None:
    """Create every table declared on the models."""
    logger.info("Initializing database tables...")

    try:
        await init_db()
        logger.info("Database tables created")
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        raise


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_init())


if __name__ == "__main__":
    main()
