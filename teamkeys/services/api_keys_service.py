"""
Service for managing user API keys.

Each operation runs inside the caller's UnitOfWork: authorize, touch a
single row, record an audit event.
"""

import logging
from typing import List, Optional, Tuple

from teamkeys.core.exceptions import NotFoundError
from teamkeys.core.pagination import Pagination
from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.models.api_key import ApiKey
from teamkeys.policies import authorize
from teamkeys.schemas.api_key import ApiKeyCreate
from teamkeys.services.api_key_scope import resolve_list_scope
from teamkeys.services.auth_service import AuthContext, generate_api_key_secret, hash_api_key_secret
from teamkeys.services.event_service import EventService

logger = logging.getLogger(__name__)


class ApiKeysService:
    """Service for managing API keys."""

    def __init__(self, uow: UnitOfWork):
        """
        Initialize the service with a unit of work.

        Args:
            uow: UnitOfWork whose transaction all operations join
        """
        self.uow = uow
        self.events = EventService(uow)

    async def create_api_key(self, auth: AuthContext, api_key_data: ApiKeyCreate) -> ApiKey:
        """
        Create a new API key owned by the actor.

        Args:
            auth: Authentication context of the request
            api_key_data: Validated request body

        Returns:
            Created API key carrying its raw secret in ``value``

        Raises:
            AuthorizationError: the actor may not create keys in their team
        """
        user = auth.user
        authorize(user, "createApiKey", user.team)

        secret = generate_api_key_secret()
        key = await self.uow.api_key_repository.create({
            "name": api_key_data.name,
            "user_id": user.id,
            "expires_at": api_key_data.expires_at,
            "hash": hash_api_key_secret(secret),
            "last4": secret[-4:],
        })

        await self.events.create_from_context(
            auth,
            name="api_keys.create",
            model_id=key.id,
            data={"name": key.name},
        )

        # Only this instance ever carries the secret; it is not persisted
        key.value = secret
        logger.info(f"API key {key.id} created for user {user.id}")
        return key

    async def list_api_keys(
        self,
        auth: AuthContext,
        pagination: Pagination,
        user_id: Optional[str] = None,
    ) -> Tuple[List[ApiKey], int]:
        """
        List the API keys visible to the actor.

        Args:
            auth: Authentication context of the request
            pagination: Offset and limit window
            user_id: Restrict the listing to this user's keys

        Returns:
            The page of keys, newest first, and the total count in scope

        Raises:
            NotFoundError: ``user_id`` does not name an existing user
            AuthorizationError: the actor may not list that user's keys
        """
        target_user = None
        if user_id is not None:
            target_user = await self.uow.user_repository.get(user_id)
            if target_user is None:
                raise NotFoundError("User not found")

        scope = resolve_list_scope(auth.user, target_user)
        logger.debug(f"Listing API keys for user {auth.user.id} in scope {scope}")

        keys = await self.uow.api_key_repository.find_all_in_scope(
            scope,
            offset=pagination.offset,
            limit=pagination.limit,
        )
        total = await self.uow.api_key_repository.count_in_scope(scope)
        return keys, total

    async def delete_api_key(self, auth: AuthContext, id: str) -> None:
        """
        Delete an API key.

        The row is locked until the transaction ends where the backend
        supports it, and the delete itself must match a row. Of two concurrent
        deletes exactly one succeeds and the other sees NotFoundError.

        Args:
            auth: Authentication context of the request
            id: Identifier of the key to delete

        Raises:
            NotFoundError: no such key
            AuthorizationError: the actor may not delete this key
        """
        key = await self.uow.api_key_repository.get(id, lock=True)
        if key is None:
            raise NotFoundError("API key not found")

        authorize(auth.user, "delete", key)

        # Captured before the row is gone
        key_id, key_name, owner_id = key.id, key.name, key.user_id

        if not await self.uow.api_key_repository.destroy(key):
            # Deleted by a concurrent request after we loaded it
            raise NotFoundError("API key not found")

        await self.events.create_from_context(
            auth,
            name="api_keys.delete",
            model_id=key_id,
            data={"name": key_name},
            user_id=owner_id,
        )
        logger.info(f"API key {key_id} deleted by user {auth.user.id}")
