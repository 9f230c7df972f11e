"""
Service dependencies - one service per request, bound to the shared
database handle from get_mongo_db (overridable in tests).
"""

from fastapi import Depends
from pymongo.database import Database

from cohort_api.db.mongodb import get_mongo_db
from cohort_api.services.mongo_service import CohortService, StudentService, UserService


def get_cohort_service(db: Database = Depends(get_mongo_db)) -> CohortService:
    return CohortService(db)


def get_student_service(db: Database = Depends(get_mongo_db)) -> StudentService:
    return StudentService(db)


def get_user_service(db: Database = Depends(get_mongo_db)) -> UserService:
    return UserService(db)
