"""
Domain errors raised by the storefront core.

Each error carries the HTTP status the API layer answers with, so routers
can let them propagate to the handler registered in main.py.
"""

from starlette import status


class StorefrontError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storefront error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class CollectionError(StorefrontError):
    """A list/create/update/delete call against the collection store failed."""
    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "Collection store operation failed"


class AuthRequiredError(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Sign in required"


class InvalidCredentialsError(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate user."


class EmailAlreadyRegisteredError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Email already registered"
