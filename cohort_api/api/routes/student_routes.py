"""
Student Routes

GET /students - List all students (cohort populated)
GET /students/cohort/{cohort_id} - Students of one cohort
GET /students/{student_id} - Get one student
POST /students - Create student
PUT /students/{student_id} - Update student (partial)
DELETE /students/{student_id} - Delete student
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List

from cohort_api.api.error_handlers import error_responses
from cohort_api.api.deps import get_student_service
from cohort_api.services.mongo_service import StudentService
from cohort_api.schemas.schemas import StudentCreate, StudentUpdate, StudentResponse

router = APIRouter(prefix="/students", tags=["Students"],
                   responses=error_responses(400, 404, 409))


@router.get("", response_model=List[StudentResponse])
def list_students(service: StudentService = Depends(get_student_service)):
    return service.list()


@router.get("/cohort/{cohort_id}", response_model=List[StudentResponse])
def list_students_by_cohort(cohort_id: str, service: StudentService = Depends(get_student_service)):
    """All students referencing the cohort. The cohort itself need not exist."""
    return service.list_by_cohort(cohort_id)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: str, service: StudentService = Depends(get_student_service)):
    """Get one student; `cohort` is null if unset or the cohort was deleted."""
    return service.get(student_id)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    data: StudentCreate,
    response: Response,
    service: StudentService = Depends(get_student_service),
):
    """
    Create student. Email is stored lowercased and must be unique (409).
    `cohort` must look like an id (400) but is not checked for existence.
    """
    created = service.create(data)
    response.headers["Location"] = f"/api/students/{created['_id']}"
    return created


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: str,
    data: StudentUpdate,
    service: StudentService = Depends(get_student_service),
):
    """Update student. Only provided fields are updated."""
    return service.update(student_id, data)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, service: StudentService = Depends(get_student_service)):
    service.delete(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
