"""
API module - FastAPI routers, dependencies and error handlers.

Usage:
    from cohort_api.api.routes import api_router, auth_router
    app.include_router(auth_router)
    app.include_router(api_router, prefix="/api")
"""
