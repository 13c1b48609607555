from fastapi import APIRouter, Request
from starlette import status
from schemas.auth_schemas import AuthStateResponse, CreateUserRequest, LoginRequest, Token, User
from services.auth_service import AuthService
from utils.deps import controller_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.get("/state", response_model=AuthStateResponse)
async def get_auth_state(controller: controller_dependency):
    return AuthStateResponse(
        phase=controller.phase,
        user=controller.user,
        has_token=controller.session.token is not None
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=User)
@limiter.limit("3/minute")
async def register(request: Request, body: CreateUserRequest, controller: controller_dependency):
    user = await AuthService.create_user(body, controller.client)

    logger.info(
        "User registered successfully",
        extra={"user_id": user.id, "email": user.email}
    )

    return user


@router.post("/login", response_model=Token)
@limiter.limit("5/minute")
async def login(request: Request, body: LoginRequest, controller: controller_dependency):
    """
    Signs the shopper in. The cart for the new user is loaded before the
    response is sent.
    """
    await controller.session.login(body.email, body.password)

    return {"access_token": controller.session.token, "token_type": "bearer"}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(controller: controller_dependency):
    await controller.session.logout()
