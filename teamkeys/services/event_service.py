"""
Audit event recording.

Events are written through the caller's UnitOfWork so they commit or roll
back together with the change they describe.
"""

import logging
from typing import Any, Dict, Optional

from teamkeys.core.unit_of_work import UnitOfWork
from teamkeys.models.event import Event
from teamkeys.services.auth_service import AuthContext

logger = logging.getLogger(__name__)


class EventService:
    """Records append-only audit events"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_from_context(
        self,
        auth: AuthContext,
        name: str,
        model_id: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
    ) -> Event:
        """
        Record an event attributed to the authenticated actor.

        Args:
            auth: Authentication context of the request
            name: Event name, e.g. ``api_keys.create``
            model_id: Identifier of the affected record
            data: Small payload describing the change
            user_id: User the change concerns, defaults to the actor

        Returns:
            The recorded event
        """
        event = await self.uow.event_repository.create({
            "name": name,
            "actor_id": auth.user.id,
            "team_id": auth.user.team_id,
            "user_id": user_id or auth.user.id,
            "model_id": model_id,
            "data": data or {},
            "auth_type": auth.type.value,
            "ip": auth.ip,
        })
        logger.info(f"Recorded event {name} for model {model_id} by user {auth.user.id}")
        return event
