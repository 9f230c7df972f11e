"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Field names are snake_case in Python and camelCase on the wire and in
MongoDB (cohortSlug, firstName, createdAt, ...). Record ids travel as "_id".
"""

from pydantic import (
    AfterValidator, AliasChoices, BaseModel, ConfigDict, Field,
    StringConstraints, model_validator,
)
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, ClassVar, Dict, Optional, Tuple
from datetime import datetime
from enum import Enum


def _lower_email(value: str) -> str:
    return value.strip().lower()


# Syntax only: one "@" with text on each side (a@school.local passes)
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+$"

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
LowerEmail = Annotated[
    str, StringConstraints(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)
]
# Login only looks the address up, any non-empty string is a valid attempt
LoginEmail = Annotated[NonEmptyStr, AfterValidator(_lower_email)]


# ============================================================
# ENUMS
# ============================================================

class Program(str, Enum):
    web_dev = "Web Dev"
    ux_ui = "UX/UI"
    data_analytics = "Data Analytics"
    cybersecurity = "Cybersecurity"


class CohortFormat(str, Enum):
    full_time = "Full Time"
    part_time = "Part Time"


# ============================================================
# BASE MODELS
# ============================================================

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_document(self) -> dict:
        """Fields as stored in MongoDB."""
        return self.model_dump(by_alias=True)


class PartialUpdate(CamelModel):
    """
    Base for PUT bodies: every field optional, only supplied fields are
    written. Sending null for a field the record requires is rejected.
    """

    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in sorted(self.model_fields_set):
            if name in self.NON_NULLABLE and getattr(self, name) is None:
                label = type(self).model_fields[name].serialization_alias or name
                raise ValueError(f"{label} cannot be null")
        return self

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


# ============================================================
# COHORT SCHEMAS
# ============================================================

class CohortCreate(CamelModel):
    cohort_slug: NonEmptyStr = Field(
        ...,
        validation_alias=AliasChoices("cohortSlug", "slug", "cohort_slug"),
        serialization_alias="cohortSlug",
    )
    cohort_name: NonEmptyStr = Field(
        ...,
        validation_alias=AliasChoices("cohortName", "name", "cohort_name"),
        serialization_alias="cohortName",
    )
    program: Program
    format: CohortFormat
    in_progress: bool = False


class CohortUpdate(PartialUpdate):
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ("cohort_slug", "cohort_name", "program", "format", "in_progress")

    cohort_slug: Optional[NonEmptyStr] = Field(
        None,
        validation_alias=AliasChoices("cohortSlug", "slug", "cohort_slug"),
        serialization_alias="cohortSlug",
    )
    cohort_name: Optional[NonEmptyStr] = Field(
        None,
        validation_alias=AliasChoices("cohortName", "name", "cohort_name"),
        serialization_alias="cohortName",
    )
    program: Optional[Program] = None
    format: Optional[CohortFormat] = None
    in_progress: Optional[bool] = None


class CohortResponse(CamelModel):
    id: str = Field(..., alias="_id")
    cohort_slug: str
    cohort_name: str
    program: str
    format: str
    in_progress: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CohortSummary(CamelModel):
    """The cohort fields embedded into a student on read."""
    id: str = Field(..., alias="_id")
    cohort_name: Optional[str] = None
    cohort_slug: Optional[str] = None
    program: Optional[str] = None
    format: Optional[str] = None


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentCreate(CamelModel):
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: LowerEmail
    phone: Optional[str] = None
    # Plain id string; shape is checked by the service, existence never is
    cohort: Optional[str] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class StudentUpdate(PartialUpdate):
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ("first_name", "last_name", "email")

    first_name: Optional[NonEmptyStr] = None
    last_name: Optional[NonEmptyStr] = None
    email: Optional[LowerEmail] = None
    phone: Optional[str] = None
    cohort: Optional[str] = None


class StudentResponse(CamelModel):
    id: str = Field(..., alias="_id")
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    cohort: Optional[CohortSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(BaseModel):
    email: LowerEmail
    password: str = Field(..., min_length=1)
    name: NonEmptyStr


class LoginRequest(BaseModel):
    email: LoginEmail
    password: str = Field(..., min_length=1)


class UserPublic(CamelModel):
    """
    Public projection of a user record. Built from the stored document;
    the password hash has no field here so it can never be serialized.
    """
    id: str = Field(..., alias="_id")
    email: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class VerifyResponse(BaseModel):
    ok: bool = True
    payload: Dict[str, Any]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class StatusResponse(BaseModel):
    status: str
    docs: str


class HealthResponse(BaseModel):
    status: str
    mongodb: str


class ErrorResponse(BaseModel):
    error: str
