"""
Cohort Tracker API
A small CRUD backend for course cohorts and their students.

Architecture:
- MongoDB: cohorts, students (weak reference to a cohort), users
- FastAPI: REST surface, JSON in and out
- JWT: bearer tokens for the protected routes
"""

__version__ = "1.0.0"
