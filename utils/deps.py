from typing import Annotated
from fastapi import Depends, HTTPException, Request
from starlette import status
from core.exceptions import AuthRequiredError
from schemas.auth_schemas import User
from services.app_controller import AppController


def get_controller(request: Request) -> AppController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            detail="Storefront is starting up")
    return controller

controller_dependency = Annotated[AppController, Depends(get_controller)]


def get_current_user(controller: controller_dependency) -> User:
    if controller.user is None:
        raise AuthRequiredError()
    return controller.user

user_dependency = Annotated[User, Depends(get_current_user)]
