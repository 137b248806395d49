from typing import Annotated, Optional
import logging

from fastapi import APIRouter, Depends, Request

from teamkeys.core.dependencies import PaginationDep, SessionFactoryDep
from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.dependencies.auth import require_auth
from teamkeys.models.enums import AuthenticationType, UserRole
from teamkeys.schemas.api_key import (
    ApiKeyCreate,
    ApiKeyCreateResponse,
    ApiKeyDelete,
    ApiKeyList,
    ApiKeyListResponse,
    SuccessResponse,
    present_api_key,
)
from teamkeys.services.api_keys_service import ApiKeysService
from teamkeys.services.auth_service import AuthContext

router = APIRouter(
    tags=["api-keys"],
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Authentication required"},
        403: {"description": "Authorization error"},
    },
)

logger = logging.getLogger(__name__)

AppMemberDep = Annotated[AuthContext, Depends(require_auth(UserRole.MEMBER, AuthenticationType.APP))]
MemberDep = Annotated[AuthContext, Depends(require_auth(UserRole.MEMBER))]


@router.post("/apiKeys.create", response_model=ApiKeyCreateResponse)
async def create_api_key(
    api_key_data: ApiKeyCreate,
    auth: AppMemberDep,
    session_factory: SessionFactoryDep,
):
    """
    Create a new API key for the authenticated user.

    The response is the only place the raw secret is ever returned.
    """
    async with UnitOfWork(session_factory) as uow:
        key = await ApiKeysService(uow).create_api_key(auth, api_key_data)
    return ApiKeyCreateResponse(data=present_api_key(key))


@router.post("/apiKeys.list", response_model=ApiKeyListResponse)
async def list_api_keys(
    request: Request,
    auth: MemberDep,
    pagination: PaginationDep,
    session_factory: SessionFactoryDep,
    api_key_data: Optional[ApiKeyList] = None,
):
    """
    List API keys visible to the authenticated user, newest first.

    Admins see the whole team; everyone else sees only their own keys.
    ``userId`` narrows the listing to one user, subject to authorization.
    """
    user_id = None
    if api_key_data is not None and api_key_data.user_id is not None:
        user_id = str(api_key_data.user_id)

    async with UnitOfWork(session_factory) as uow:
        keys, total = await ApiKeysService(uow).list_api_keys(auth, pagination, user_id=user_id)

    return ApiKeyListResponse(
        pagination=pagination.with_total(total, request.url.path),
        data=[present_api_key(key) for key in keys],
    )


@router.post("/apiKeys.delete", response_model=SuccessResponse)
async def delete_api_key(
    api_key_data: ApiKeyDelete,
    auth: MemberDep,
    session_factory: SessionFactoryDep,
):
    """
    Delete an API key owned by the user, or by a team member when the user is an admin.
    """
    async with UnitOfWork(session_factory) as uow:
        await ApiKeysService(uow).delete_api_key(auth, str(api_key_data.id))
    return SuccessResponse(success=True)
