"""
Authentication for the FastAPI API.

A single admin account is checked by a pluggable credential verifier;
successful logins receive a signed, time-limited JWT which the mutating
book endpoints require as ``Authorization: Bearer <token>``. Tokens are
stateless: there is no session store and no revocation.
"""

import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, Field

from library_api.config import APIConfig
from library_api.errors import InvalidCredentialsError, InvalidTokenError, MissingTokenError
from library_api.models import UserInfo

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "admin"

# Security scheme
security = HTTPBearer(auto_error=False)


class CredentialVerifier(ABC):
    """Checks a username/password pair and returns the matching identity."""

    @abstractmethod
    def verify(self, username: str, password: str) -> Optional[UserInfo]:
        """Return the identity for valid credentials, None otherwise."""


def _as_bytes(value: str) -> bytes:
    # JSON bodies may carry lone surrogates, which strict utf-8 refuses
    return value.encode("utf-8", "surrogatepass")


class StaticCredentialVerifier(CredentialVerifier):
    """Accepts exactly one fixed username/password pair."""

    def __init__(self, username: str = "admin", password: str = "test123", role: str = ADMIN_ROLE):
        self._username = username
        self._password = password
        self._role = role

    def verify(self, username: str, password: str) -> Optional[UserInfo]:
        # Both comparisons always run so unknown users and wrong passwords look the same
        username_ok = secrets.compare_digest(_as_bytes(username), _as_bytes(self._username))
        password_ok = secrets.compare_digest(_as_bytes(password), _as_bytes(self._password))
        if username_ok and password_ok:
            return UserInfo(username=self._username, role=self._role)
        return None


class IssuedToken(BaseModel):
    """A freshly signed session token."""
    token: str = Field(..., description="Signed JWT")
    expires_at: datetime = Field(..., description="Expiry time (UTC)")
    expires_in: str = Field(..., description="Lifetime label, e.g. 24h")
    user: UserInfo = Field(..., description="Identity embedded in the token")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        verifier: Optional[CredentialVerifier] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        """
        Initialize the token service.

        Args:
            secret_key: HMAC signing secret
            algorithm: JWT signing algorithm
            expires_in: Token lifetime
            verifier: Credential check used by ``issue``
            clock: Source of the current time (UTC)
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.verifier = verifier or StaticCredentialVerifier()
        self.clock = clock

    @classmethod
    def from_config(cls, config: APIConfig, verifier: Optional[CredentialVerifier] = None) -> "TokenService":
        return cls(
            secret_key=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            expires_in=timedelta(hours=config.token_expire_hours),
            verifier=verifier
        )

    @property
    def expires_in_label(self) -> str:
        hours = int(self.expires_in.total_seconds() // 3600)
        return f"{hours}h"

    def issue(self, username: str, password: str) -> IssuedToken:
        """
        Check credentials and sign a token for the matching identity.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        user = self.verifier.verify(username, password)
        if user is None:
            logger.warning("Login failed", username=username)
            raise InvalidCredentialsError()

        issued_at = self.clock()
        expires_at = issued_at + self.expires_in
        claims = {
            "username": user.username,
            "role": user.role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

        logger.info("Login successful", username=user.username, expires_at=expires_at.isoformat())
        return IssuedToken(token=token, expires_at=expires_at, expires_in=self.expires_in_label, user=user)

    def verify(self, token: Optional[str]) -> UserInfo:
        """
        Validate a token's signature and expiry.

        Returns:
            Identity embedded in the token

        Raises:
            MissingTokenError: If no token was supplied
            InvalidTokenError: If the token is malformed, expired or forged
        """
        if not token:
            raise MissingTokenError()

        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token rejected", reason="expired")
            raise InvalidTokenError("Token has expired")
        except JWTError as e:
            logger.warning("Token rejected", reason=str(e))
            raise InvalidTokenError(str(e) or "Invalid token")

        username = claims.get("username")
        role = claims.get("role")
        if not isinstance(username, str) or not isinstance(role, str):
            logger.warning("Token rejected", reason="missing claims")
            raise InvalidTokenError("Token is missing required claims")

        return UserInfo(username=username, role=role)


def get_token_service(request: Request) -> TokenService:
    """Token service owned by the running application."""
    return request.app.state.token_service


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service)
) -> UserInfo:
    """
    Verify the bearer token from the request.

    Raises:
        MissingTokenError: If no bearer token was sent
        InvalidTokenError: If the token is invalid or lacks the admin role
    """
    if credentials is None:
        raise MissingTokenError()

    user = token_service.verify(credentials.credentials)
    if user.role != ADMIN_ROLE:
        logger.warning("Token rejected", reason="insufficient role", username=user.username)
        raise InvalidTokenError("Token does not grant admin access")
    return user
