"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas: what the API accepts (CohortCreate, StudentUpdate, ...)
- Response schemas: what it returns (CohortResponse, UserPublic, ...)
"""
