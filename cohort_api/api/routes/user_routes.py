"""
User Routes (token required)

GET /users/{user_id} - Public profile of a user (never the password hash)
"""

from fastapi import APIRouter, Depends

from cohort_api.api.error_handlers import error_responses
from cohort_api.api.deps import get_user_service
from cohort_api.core.auth import get_current_user
from cohort_api.services.mongo_service import UserService
from cohort_api.schemas.schemas import UserPublic

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_user)],
    responses=error_responses(400, 401, 404),
)


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get(user_id)
