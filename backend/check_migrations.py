#!/usr/bin/env python3
"""Quick script to check that the papaya tables exist in the database"""

import sys

from sqlalchemy import inspect

from papaya.database import engine

REQUIRED_TABLES = ["user", "tournament", "participant", "match"]


def check_tables():
    """Report required tables that are missing; True when none are"""
    existing_tables = set(inspect(engine).get_table_names())

    print(f"Database: {engine.url}")
    missing_tables = [table for table in REQUIRED_TABLES if table not in existing_tables]
    for table in REQUIRED_TABLES:
        print(f"{'ok' if table in existing_tables else 'MISSING':8} {table}")

    if missing_tables:
        print("Run migrations with: alembic upgrade head (or start the API once)")
        return False
    return True


if __name__ == "__main__":
    sys.exit(0 if check_tables() else 1)
