from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from teamkeys.core.dependencies import SessionFactoryDep
from teamkeys.core.exceptions import AuthenticationError, AuthorizationError
from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.models.enums import AuthenticationType, UserRole
from teamkeys.services.auth_service import AuthContext, AuthService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_context(
    request: Request,
    session_factory: SessionFactoryDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthContext:
    """
    Resolve the calling principal from the bearer credentials.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    async with UnitOfWork(session_factory) as uow:
        user, auth_type = await AuthService(uow).authenticate(credentials.credentials)

    return AuthContext(
        user=user,
        type=auth_type,
        ip=request.client.host if request.client else None,
    )


def require_auth(role: UserRole = UserRole.MEMBER, auth_type: Optional[AuthenticationType] = None):
    """
    Require an authenticated actor with at least ``role``.
    This is a dependency factory that creates a dependency.

    When ``auth_type`` is given the request must also have authenticated that way;
    apiKeys.create uses this so that an API key cannot mint further keys.
    """
    async def _require_auth(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if not auth.user.role.at_least(role):
            raise AuthorizationError(reason=f"{role.value} role required")
        if auth_type is not None and auth.type != auth_type:
            raise AuthorizationError(reason=f"{auth_type.value} authentication required")
        return auth

    return _require_auth
