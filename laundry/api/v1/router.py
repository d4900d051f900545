"""
API v1 Router - aggregates the user and booking endpoints.
"""
from fastapi import APIRouter

from laundry.api.v1 import bookings, users

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        503: {"description": "Service Unavailable"},
    }
)

router.include_router(users.router)
router.include_router(bookings.router)
