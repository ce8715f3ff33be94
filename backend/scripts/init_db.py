#!/usr/bin/env python3
"""
Create every TikTik table on the database named by DATABASE_URL.
Existing tables are left alone; use `alembic upgrade head` for managed schemas.
Run from backend dir: python scripts/init_db.py
"""
import asyncio
import os
import sys

# Load .env from backend dir
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

from tiktik.config import settings  # noqa: E402
from tiktik.db.session import engine, init_db  # noqa: E402


async def main():
    print(f"Creating tables on {settings.database_url.split('@')[-1]}")
    await init_db()
    await engine.dispose()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
