"""
Visibility scope for listing API keys.

The scope is resolved once from the actor and the optional target user,
then translated into a query by ``ApiKeyRepository``.
"""

from dataclasses import dataclass
from typing import Optional, Union

from teamkeys.models.user import User
from teamkeys.policies import authorize, cannot


@dataclass(frozen=True)
class TeamKeys:
    """Every key owned by a member of the team."""

    team_id: str


@dataclass(frozen=True)
class OwnKeys:
    """Only the actor's own keys."""

    team_id: str
    user_id: str


@dataclass(frozen=True)
class SpecificUserKeys:
    """Keys of one explicitly requested user."""

    team_id: str
    user_id: str


ApiKeyScope = Union[TeamKeys, OwnKeys, SpecificUserKeys]


def resolve_list_scope(actor: User, target_user: Optional[User] = None) -> ApiKeyScope:
    """
    Decide which keys ``actor`` may list.

    An explicit target user always wins, provided the actor may list that
    user's keys; otherwise non-admins are limited to their own keys.

    Raises:
        AuthorizationError: the actor may not list ``target_user``'s keys
    """
    if target_user is not None:
        authorize(actor, "listApiKeys", target_user)
        return SpecificUserKeys(team_id=actor.team_id, user_id=target_user.id)

    if cannot(actor, "listApiKeys", actor.team):
        return OwnKeys(team_id=actor.team_id, user_id=actor.id)

    return TeamKeys(team_id=actor.team_id)
