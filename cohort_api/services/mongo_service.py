"""
MongoDB Service - CRUD operations for the document collections.

Collections in this database:
1. cohorts  - course groups, unique cohortSlug
2. students - learners; `cohort` holds a cohort _id or nothing
3. users    - login credentials, unique email, bcrypt hash only

Each service wraps one collection of an injected Database handle. Failures
are raised as ApiError; DuplicateKeyError from a unique index is left to
propagate and is translated by the global error handlers.

Student -> cohort is a weak reference: the cohort's existence is never
checked on write, deleting a cohort never touches students, and a reference
that no longer resolves reads back as `cohort: null`.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from cohort_api.core.auth import dummy_verify, hash_password, verify_password
from cohort_api.core.errors import conflict, malformed, not_found, unauthenticated
from cohort_api.db.mongodb import get_collection
from cohort_api.schemas.schemas import (
    CohortCreate, CohortUpdate, SignupRequest, StudentCreate, StudentUpdate, UserPublic,
)

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: Any, message: str = "Invalid id") -> ObjectId:
    """Parse a path/body id, raising 400 when it is not ObjectId-shaped."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise malformed(message)
    return ObjectId(value)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _stamp_new(doc: dict) -> dict:
    now = _now()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    return doc


# ============================================================
# COHORTS COLLECTION
# ============================================================

class CohortService:
    """CRUD over the cohorts collection."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "cohorts")

    def list(self) -> List[dict]:
        return serialize_docs(list(self.collection.find()))

    def get(self, cohort_id: str) -> dict:
        doc = self.collection.find_one({"_id": to_object_id(cohort_id)})
        if doc is None:
            raise not_found()
        return serialize_doc(doc)

    def create(self, data: CohortCreate) -> dict:
        doc = _stamp_new(data.to_document())
        doc["_id"] = self.collection.insert_one(doc).inserted_id
        logger.info("Created cohort %s (%s)", doc["_id"], doc["cohortSlug"])
        return serialize_doc(doc)

    def update(self, cohort_id: str, data: CohortUpdate) -> dict:
        oid = to_object_id(cohort_id)
        changes = data.to_document()
        if not changes:
            return self.get(cohort_id)

        changes["updatedAt"] = _now()
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise not_found()
        return serialize_doc(doc)

    def delete(self, cohort_id: str) -> None:
        # Not cascading: students keep whatever id they reference
        result = self.collection.delete_one({"_id": to_object_id(cohort_id)})
        if result.deleted_count == 0:
            raise not_found()
        logger.info("Deleted cohort %s", cohort_id)


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentService:
    """CRUD over the students collection; every read resolves `cohort`."""

    # Cohort fields embedded into each student on read
    COHORT_FIELDS = {"cohortName": 1, "cohortSlug": 1, "program": 1, "format": 1}

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "students")
        self.cohorts: Collection = get_collection(db, "cohorts")

    def _populate(self, docs: List[dict]) -> List[dict]:
        """
        Replace each stored cohort id by the cohort's display fields.
        One lookup for the whole batch; unresolvable ids become None.
        """
        ids = {doc["cohort"] for doc in docs if isinstance(doc.get("cohort"), ObjectId)}
        found: Dict[ObjectId, dict] = {}
        if ids:
            for cohort in self.cohorts.find({"_id": {"$in": list(ids)}}, self.COHORT_FIELDS):
                found[cohort["_id"]] = cohort

        for doc in docs:
            cohort = found.get(doc.get("cohort"))
            doc["cohort"] = dict(cohort, _id=str(cohort["_id"])) if cohort else None
            serialize_doc(doc)
        return docs

    @staticmethod
    def _cohort_ref(value: Optional[str]) -> Optional[ObjectId]:
        if value is None or value == "":
            return None
        return to_object_id(value, "Invalid cohort id")

    def list(self) -> List[dict]:
        return self._populate(list(self.collection.find()))

    def list_by_cohort(self, cohort_id: str) -> List[dict]:
        oid = to_object_id(cohort_id)
        return self._populate(list(self.collection.find({"cohort": oid})))

    def get(self, student_id: str) -> dict:
        doc = self.collection.find_one({"_id": to_object_id(student_id)})
        if doc is None:
            raise not_found()
        return self._populate([doc])[0]

    def create(self, data: StudentCreate) -> dict:
        doc = data.to_document()
        cohort = self._cohort_ref(doc.pop("cohort", None))
        if cohort is not None:
            doc["cohort"] = cohort

        result = self.collection.insert_one(_stamp_new(doc))
        logger.info("Created student %s", result.inserted_id)
        return self.get(str(result.inserted_id))

    def update(self, student_id: str, data: StudentUpdate) -> dict:
        oid = to_object_id(student_id)
        changes = data.to_document()
        if "cohort" in changes:
            changes["cohort"] = self._cohort_ref(changes["cohort"])
        if not changes:
            return self.get(student_id)

        changes["updatedAt"] = _now()
        result = self.collection.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise not_found()
        return self.get(student_id)

    def delete(self, student_id: str) -> None:
        result = self.collection.delete_one({"_id": to_object_id(student_id)})
        if result.deleted_count == 0:
            raise not_found()
        logger.info("Deleted student %s", student_id)


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Credential records. Everything returned from here is a UserPublic,
    so the stored hash never reaches a response.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "users")

    def signup(self, data: SignupRequest) -> UserPublic:
        if self.collection.find_one({"email": data.email}, {"_id": 1}):
            raise conflict("Email already exists")

        doc = _stamp_new({
            "email": data.email,
            "password": hash_password(data.password),
            "name": data.name,
        })
        doc["_id"] = self.collection.insert_one(doc).inserted_id
        logger.info("Registered user %s", doc["_id"])
        return UserPublic.model_validate(serialize_doc(doc))

    def authenticate(self, email: str, password: str) -> UserPublic:
        """
        Check credentials. Unknown email and wrong password fail the same
        way, with the same message, after the same amount of hashing work.
        """
        doc = self.collection.find_one({"email": email})
        if doc is None:
            dummy_verify()
            raise unauthenticated("Invalid credentials")
        if not verify_password(password, doc["password"]):
            raise unauthenticated("Invalid credentials")
        return UserPublic.model_validate(serialize_doc(doc))

    def get(self, user_id: str) -> UserPublic:
        doc = self.collection.find_one({"_id": to_object_id(user_id)}, {"password": 0})
        if doc is None:
            raise not_found()
        return UserPublic.model_validate(serialize_doc(doc))
