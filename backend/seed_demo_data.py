#!/usr/bin/env python3
"""
Seed demo data: one published tournament per format, plus a superadmin.

Wipes existing tournaments, participants and matches. Users are kept.

Usage:
    SUPERADMIN_EMAIL=admin@papaya.test SUPERADMIN_PASSWORD=secret python seed_demo_data.py
"""

import logging
import os
import sys

from dotenv import load_dotenv
from sqlmodel import Session

from papaya.database import engine, init_db
from papaya.errors import PapayaError
from papaya.models.tournament import TournamentFormat
from papaya.services.demo_seed import ensure_superadmin, seed_demo_tournaments

load_dotenv()

logger = logging.getLogger("seed_demo_data")


def main() -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    init_db()

    with Session(engine) as session:
        try:
            tournaments = seed_demo_tournaments(session)
            for tournament in tournaments:
                print(f"  [{tournament.id}] {tournament.name} ({TournamentFormat(tournament.format).value})")

            email = os.getenv("SUPERADMIN_EMAIL")
            password = os.getenv("SUPERADMIN_PASSWORD")
            if email and password:
                admin = ensure_superadmin(session, email, password)
                print(f"Superadmin: {admin.email} (id {admin.id})")
            else:
                logger.info("SUPERADMIN_EMAIL/SUPERADMIN_PASSWORD not set, skipping superadmin")
        except PapayaError as e:
            logger.error("Seeding failed: %s", e.message)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
