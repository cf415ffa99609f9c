"""
Create the PostgreSQL database named in DATABASE_URL, then create the tables

Run from backend/src:
    python ../../scripts/create_db.py
"""
import asyncio
import os
import sys

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

sys.path.append(os.getcwd())

from core.config import settings
from core.database import close_db, init_db
from core.logging_config import logger


async def create_database():
    url = make_url(settings.DATABASE_URL)
    if not url.drivername.startswith("postgresql"):
        logger.info(f"{url.drivername} needs no server-side database, creating tables only")
        await init_db()
        await close_db()
        return

    target_db = url.database
    # Connect to the maintenance database to issue CREATE DATABASE
    engine = create_async_engine(url.set(database="postgres"), isolation_level="AUTOCOMMIT")

    try:
        async with engine.connect() as conn:
            result = await conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"), {"name": target_db}
            )
            if result.scalar():
                logger.info(f"Database {target_db} already exists")
            else:
                await conn.execute(text(f'CREATE DATABASE "{target_db}"'))
                logger.info(f"Database {target_db} created")
    finally:
        await engine.dispose()

    await init_db()
    await close_db()
    logger.info("✅ Tables created")


if __name__ == "__main__":
    asyncio.run(create_database())
