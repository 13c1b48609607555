"""
Auth session for one storefront shopper.

The session starts in the loading state, settles once ``initialize`` has run
and then changes only through ``login``/``logout``. Interested parties
subscribe and receive every ``AuthState`` transition; they never read the
result of ``login`` directly.

Lifecycle: construct -> subscribe -> initialize -> (login/logout events)
-> unsubscribe.
"""

import inspect
from typing import Awaitable, Callable, List, Optional, Union

from core.exceptions import CollectionError
from schemas.auth_schemas import AuthState
from services.auth_service import AuthService
from services.collection_client import CollectionClient
from services.token_service import TokenService
from utils.logger import get_logger

logger = get_logger(__name__)

AuthCallback = Callable[[AuthState], Union[None, Awaitable[None]]]


class AuthSession:

    def __init__(self, client: CollectionClient):
        self._client = client
        self._state = AuthState(user=None, is_loading=True)
        self._subscribers: List[AuthCallback] = []
        self.token: Optional[str] = None

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, callback: AuthCallback) -> Callable[[], None]:
        """Register ``callback`` for state transitions; returns the unsubscribe handle."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _set_state(self, state: AuthState):
        self._state = state
        for callback in list(self._subscribers):
            result = callback(state)
            if inspect.isawaitable(result):
                await result

    async def initialize(self, token: Optional[str] = None):
        """Leave the loading state, restoring the shopper from ``token`` when it is still valid."""
        user = None
        if token:
            user = await self._restore(token)
            if user is not None:
                self.token = token

        await self._set_state(AuthState(user=user, is_loading=False))

    async def _restore(self, token: str):
        payload = TokenService.decode_access_token(token)
        if payload is None:
            logger.info("Stored session token rejected")
            return None

        try:
            user = await AuthService.get_user_by_id(self._client, payload["id"])
        except CollectionError as e:
            logger.error(
                f"Failed to restore session: {str(e)}",
                extra={"user_id": payload["id"]},
                exc_info=True
            )
            return None

        if user is None:
            logger.warning("Session token refers to an unknown user", extra={"user_id": payload["id"]})
        return user

    async def login(self, email: str, password: str):
        """
        Raises:
            InvalidCredentialsError: unknown email or wrong password; state is unchanged
        """
        user = await AuthService.authenticate_user(email, password, self._client)
        self.token = TokenService.create_access_token(user.email, user.id)

        logger.info("User logged in successfully", extra={"user_id": user.id, "email": user.email})
        await self._set_state(AuthState(user=user, is_loading=False))

    async def logout(self):
        previous = self._state.user
        self.token = None

        if previous is not None:
            logger.info("User logged out", extra={"user_id": previous.id})
        await self._set_state(AuthState(user=None, is_loading=False))
