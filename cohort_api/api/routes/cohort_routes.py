"""
Cohort Routes

GET /cohorts - List all cohorts
GET /cohorts/{cohort_id} - Get one cohort
POST /cohorts - Create cohort
PUT /cohorts/{cohort_id} - Update cohort (partial)
DELETE /cohorts/{cohort_id} - Delete cohort (students are not touched)
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List

from cohort_api.api.error_handlers import error_responses
from cohort_api.api.deps import get_cohort_service
from cohort_api.services.mongo_service import CohortService
from cohort_api.schemas.schemas import CohortCreate, CohortUpdate, CohortResponse

router = APIRouter(prefix="/cohorts", tags=["Cohorts"],
                   responses=error_responses(400, 404, 409))


@router.get("", response_model=List[CohortResponse])
def list_cohorts(service: CohortService = Depends(get_cohort_service)):
    """All cohorts, unfiltered."""
    return service.list()


@router.get("/{cohort_id}", response_model=CohortResponse)
def get_cohort(cohort_id: str, service: CohortService = Depends(get_cohort_service)):
    return service.get(cohort_id)


@router.post("", response_model=CohortResponse, status_code=status.HTTP_201_CREATED)
def create_cohort(
    data: CohortCreate,
    response: Response,
    service: CohortService = Depends(get_cohort_service),
):
    """
    Create a cohort.

    `slug` / `name` are accepted as shorthands for `cohortSlug` / `cohortName`.
    409 if the slug is taken.
    """
    created = service.create(data)
    response.headers["Location"] = f"/api/cohorts/{created['_id']}"
    return created


@router.put("/{cohort_id}", response_model=CohortResponse)
def update_cohort(
    cohort_id: str,
    data: CohortUpdate,
    service: CohortService = Depends(get_cohort_service),
):
    """Update cohort. Only provided fields are updated."""
    return service.update(cohort_id, data)


@router.delete("/{cohort_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cohort(cohort_id: str, service: CohortService = Depends(get_cohort_service)):
    service.delete(cohort_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
