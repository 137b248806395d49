from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple
import hashlib
import logging
import secrets
import string

import jwt
from jwt.exceptions import PyJWTError as JWTError

from teamkeys.config import settings
from teamkeys.core.exceptions import AuthenticationError
from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.models.enums import AuthenticationType
from teamkeys.models.user import User

logger = logging.getLogger(__name__)

_SECRET_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class AuthContext:
    """The authenticated principal and how it authenticated."""

    user: User
    type: AuthenticationType
    ip: Optional[str] = None


def generate_api_key_secret() -> str:
    """Generate a new raw API key secret"""
    body = "".join(secrets.choice(_SECRET_ALPHABET) for _ in range(settings.API_KEY_SECRET_LENGTH))
    return f"{settings.API_KEY_PREFIX}{body}"


def hash_api_key_secret(secret: str) -> str:
    """Hash an API key secret for storage and lookup"""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def is_api_key_secret(token: str) -> bool:
    return token.startswith(settings.API_KEY_PREFIX)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create a new JWT access token"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode a JWT token"""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


class AuthService:
    """Resolves bearer credentials to an authenticated user"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def authenticate(self, token: str) -> Tuple[User, AuthenticationType]:
        """
        Resolve a bearer token.

        Tokens carrying the API key prefix are looked up as API keys, anything
        else is treated as a JWT issued to the application.

        Raises:
            AuthenticationError: the token is invalid, expired, or names an
                unknown or suspended user
        """
        if is_api_key_secret(token):
            user = await self._authenticate_api_key(token)
            auth_type = AuthenticationType.API
        else:
            user = await self._authenticate_jwt(token)
            auth_type = AuthenticationType.APP

        if user.is_suspended:
            raise AuthenticationError("Your access has been suspended")
        return user, auth_type

    async def _authenticate_jwt(self, token: str) -> User:
        try:
            payload = decode_token(token)
        except JWTError:
            raise AuthenticationError("Invalid token")

        user_id = payload.get("sub")
        if user_id is None:
            raise AuthenticationError("Invalid token")

        user = await self.uow.user_repository.get(user_id)
        if user is None:
            raise AuthenticationError("Invalid token")
        return user

    async def _authenticate_api_key(self, token: str) -> User:
        api_key = await self.uow.api_key_repository.find_by_hash(hash_api_key_secret(token))
        if api_key is None:
            raise AuthenticationError("Invalid API key")
        if api_key.is_expired():
            raise AuthenticationError("API key has expired")

        await self._touch(api_key)
        return api_key.user

    async def _touch(self, api_key) -> None:
        now = datetime.now(timezone.utc)
        last = api_key.last_active_at
        if last is not None and last.tzinfo is None:
            last = last.replace(tzinfo=timezone.utc)
        if last is None or (now - last).total_seconds() >= settings.API_KEY_ACTIVITY_THROTTLE_SECONDS:
            logger.debug(f"Recording activity for API key {api_key.id}")
            await self.uow.api_key_repository.touch_last_active(api_key.id, now)
