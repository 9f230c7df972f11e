"""
Authentication Routes

POST /auth/signup - Register new user
POST /auth/login - Login and get JWT token
GET /auth/verify - Check a token and echo its claims
"""

from fastapi import APIRouter, Depends, status

from cohort_api.api.error_handlers import error_responses
from cohort_api.api.deps import get_user_service
from cohort_api.core.auth import create_access_token, get_current_user
from cohort_api.services.mongo_service import UserService
from cohort_api.schemas.schemas import (
    SignupRequest, LoginRequest, LoginResponse, UserPublic, VerifyResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"],
                   responses=error_responses(400, 401, 409))


@router.post("/signup", response_model=UserPublic, status_code=status.HTTP_201_CREATED,
             response_model_exclude_none=True)
def signup(request: SignupRequest, service: UserService = Depends(get_user_service)):
    """
    Register a new user account.

    The password is stored only as a bcrypt hash. 409 if the email is taken.
    """
    user = service.signup(request)
    return UserPublic(id=user.id, email=user.email, name=user.name)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(request: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Login and receive JWT access token (valid 7 days).

    Include token in requests: Authorization: Bearer <token>
    """
    user = service.authenticate(request.email, request.password)
    token = create_access_token(data={"sub": user.id, "email": user.email, "name": user.name})
    return LoginResponse(token=token, user=UserPublic(id=user.id, email=user.email, name=user.name))


@router.get("/verify", response_model=VerifyResponse)
def verify(claims: dict = Depends(get_current_user)):
    """Valid token -> its decoded claims."""
    return VerifyResponse(ok=True, payload=claims)
