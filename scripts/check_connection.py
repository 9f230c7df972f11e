#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the MongoDB connection and create the indexes.
Usage: python scripts/check_connection.py
"""
import logging
import sys

from cohort_api.core.config import get_settings
from cohort_api.core.observability import setup_logging
from cohort_api.db.mongodb import init_mongo_indexes, test_mongo_connection


def main() -> int:
    setup_logging("INFO")
    logger = logging.getLogger("check_connection")
    settings = get_settings()

    logger.info("Database: %s", settings.mongodb_db)
    if not test_mongo_connection():
        logger.error("MongoDB: FAILED")
        return 1

    logger.info("MongoDB: CONNECTED")
    init_mongo_indexes()
    return 0


if __name__ == "__main__":
    sys.exit(main())
