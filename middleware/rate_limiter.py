from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from core.config import settings


def get_user_id(request: Request):
    """Rate-limit key: the signed-in shopper when there is one, else the client address."""
    controller = getattr(request.app.state, "controller", None)
    if controller is not None and controller.user is not None:
        return f"user:{controller.user.id}"

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_user_id,
    default_limits=["200/hour"],
    enabled=settings.ENV != "testing"
)
