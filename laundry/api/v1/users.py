"""
User endpoints: login, resident registration, listing and removal.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response

from laundry.api.deps import (
    MISSING_AUTH_MESSAGE,
    get_app_settings,
    get_controller,
    get_current_username,
    get_jwt_manager,
    require_result,
)
from laundry.config.settings import Settings
from laundry.core.exceptions import AuthenticationError, RequestError
from laundry.core.security import JWTManager
from laundry.schemas import RegisterDTO, UserInfoStatusCode, UserStatusCode
from laundry.schemas.requests import DeleteUserRequest, LoginRequest
from laundry.services import Controller

router = APIRouter(prefix="/user", tags=["Users"])

REGISTER_ERRORS = {
    UserStatusCode.EXISTENT_EMAIL: "E-Mail already exists.",
    UserStatusCode.EXISTENT_USERNAME: "Username already exists.",
}


@router.post("/login")
def login(
    body: LoginRequest,
    response: Response,
    controller: Controller = Depends(get_controller),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    config: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """Authenticate and set the auth cookie."""
    user = require_result(controller.login_user(body.username, body.password), "login user")
    if user.status_code != UserStatusCode.OK:
        raise AuthenticationError("User login failed.")

    response.set_cookie(
        key=config.AUTH_COOKIE_NAME,
        value=jwt_manager.create_access_token(user.username),
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=config.AUTH_COOKIE_SECURE,
        samesite="lax",
    )
    return user.to_response()


@router.post("/registerResident")
def register_resident(
    body: RegisterDTO,
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    user = require_result(controller.register_resident(username, body), "register resident")
    if user.status_code in (UserStatusCode.INVALID_USER, UserStatusCode.INVALID_PRIVILEGE):
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    if user.status_code != UserStatusCode.OK:
        raise RequestError(REGISTER_ERRORS.get(user.status_code, "Resident user signup failed."))
    return user.to_response()


@router.get("/listUsers")
def list_users(
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    users = require_result(controller.list_users(username), "list users")
    if users.status_code != UserInfoStatusCode.OK:
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    return users.to_response()


@router.post("/deleteUser")
def delete_user(
    body: DeleteUserRequest,
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, bool]:
    result = require_result(controller.delete_user(username, body.username), "delete user")
    return {"result": result}
