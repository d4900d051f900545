"""
FastAPI dependencies shared by the v1 routers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from laundry.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(username: str = Depends(deps.get_current_username)):
        return {"username": username}
"""

from typing import Optional, TypeVar

from fastapi import Depends, Request

from laundry.config.settings import Settings
from laundry.core.exceptions import AuthenticationError, ServiceUnavailableError, TokenError
from laundry.core.security import JWTManager
from laundry.services import Controller

T = TypeVar("T")

MISSING_AUTH_MESSAGE = "Missing or invalid authorization cookie."


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_controller(request: Request) -> Controller:
    return request.app.state.controller


def get_jwt_manager(request: Request) -> JWTManager:
    return request.app.state.jwt_manager


def get_current_username(
    request: Request,
    config: Settings = Depends(get_app_settings),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> str:
    """Username carried by the auth cookie; 401 when it is missing or invalid."""
    token = request.cookies.get(config.AUTH_COOKIE_NAME)
    if not token:
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    try:
        return jwt_manager.get_username(token)
    except TokenError as e:
        raise AuthenticationError(MISSING_AUTH_MESSAGE) from e


def require_result(result: Optional[T], operation: str) -> T:
    """Turn the ``None`` sentinel of a core operation into a 503."""
    if result is None:
        raise ServiceUnavailableError(operation=operation)
    return result
