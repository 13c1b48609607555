from datetime import datetime, timezone, timedelta
from jose import jwt, JWTError
from core.config import settings


class TokenService:
    """
    Issues and reads the access token that represents a signed-in session.
    The token is what a returning shopper hands back to restore the session.
    """

    @staticmethod
    def create_access_token(email: str, user_id: str, expires_delta: timedelta = None) -> str:
        """
        Args:
            email: User's email
            user_id: User's ID
            expires_delta: Token lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)

        Returns:
            JWT access token string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": email,
            "id": user_id,
            "type": "access",
            "exp": datetime.now(timezone.utc) + expires_delta
        }

        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> dict | None:
        """
        Returns the token claims, or None when the token is malformed,
        expired, signed with another key or not an access token.
        """
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            return None

        if payload.get("type") != "access" or not payload.get("id"):
            return None

        return payload
