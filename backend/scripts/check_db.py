#!/usr/bin/env python3
"""
Check database structure - verify all tables and columns exist.
"""
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

from sqlalchemy import inspect  # noqa: E402

import tiktik.models  # noqa: E402,F401
from tiktik.db.base import Base  # noqa: E402
from tiktik.db.session import engine  # noqa: E402


def _describe(sync_conn) -> int:
    inspector = inspect(sync_conn)
    existing = set(inspector.get_table_names())
    missing = 0
    print("Tables:")
    for table in Base.metadata.sorted_tables:
        if table.name not in existing:
            print(f"  - {table.name}: MISSING")
            missing += 1
            continue
        print(f"  - {table.name}: OK")
        columns = {c["name"]: c["type"] for c in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in columns:
                print(f"    - {column.name}: {columns[column.name]}")
            else:
                print(f"    - {column.name}: MISSING")
                missing += 1
    return missing


async def main():
    print("Checking database structure...\n")
    async with engine.connect() as conn:
        missing = await conn.run_sync(_describe)
    await engine.dispose()
    print(f"\n{missing} missing" if missing else "\nDone!")
    sys.exit(1 if missing else 0)


if __name__ == "__main__":
    asyncio.run(main())
