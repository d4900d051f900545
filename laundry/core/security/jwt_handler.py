"""
JWT token management utilities.

Access tokens carry the username and travel in an HttpOnly cookie.
"""

import jwt
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from laundry.core.exceptions import TokenError

logger = logging.getLogger(__name__)


class JWTManager:
    """
    JWT token manager for authentication.

    Handles creation and validation of access tokens.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 60

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_minutes: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        if not secret_key:
            raise ValueError("JWT secret key cannot be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    def create_access_token(
        self,
        username: str,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            username: Account username stored in the ``sub`` claim
            additional_claims: Additional claims to include
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            "sub": username,
            "token_type": "access",
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {username}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            TokenError: If the token is expired, malformed or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm]
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Token verification failed: token expired")
            raise TokenError("Token expired", expired=True) from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise TokenError(str(e)) from e

        if payload.get("token_type") != "access" or not payload.get("sub"):
            raise TokenError("Invalid token payload")
        return payload

    def get_username(self, token: str) -> str:
        return self.verify_token(token)["sub"]
