"""
School management REST backend.

This package exposes the FastAPI app along with the database models,
services and routers for teachers, students, courses and users.
"""

from .main import create_app

__all__ = ["create_app"]
