from typing import Optional

from teamkeys.models.api_key import ApiKey
from teamkeys.models.enums import UserRole
from teamkeys.models.team import Team
from teamkeys.models.user import User
from teamkeys.policies.base import rule


def _team_member(actor: User, team_id: str) -> Optional[str]:
    if actor.team_id != team_id:
        return "different team"
    if actor.is_suspended:
        return "actor suspended"
    return None


def _team_admin(actor: User, team_id: str) -> Optional[str]:
    reason = _team_member(actor, team_id)
    if reason:
        return reason
    if not actor.is_admin:
        return "admin role required"
    return None


@rule(Team, "createApiKey")
def create_api_key(actor: User, team: Team) -> Optional[str]:
    reason = _team_member(actor, team.id)
    if reason:
        return reason
    if not actor.role.at_least(UserRole.MEMBER):
        return "member role required"
    return None


@rule(Team, "listApiKeys")
def list_team_api_keys(actor: User, team: Team) -> Optional[str]:
    return _team_admin(actor, team.id)


@rule(User, "listApiKeys")
def list_user_api_keys(actor: User, user: User) -> Optional[str]:
    reason = _team_member(actor, user.team_id)
    if reason:
        return reason
    if actor.id == user.id:
        return None
    return _team_admin(actor, user.team_id)


def _owner_or_team_admin(actor: User, key: ApiKey) -> Optional[str]:
    reason = _team_member(actor, key.user.team_id)
    if reason:
        return reason
    if key.user_id == actor.id:
        return None
    return _team_admin(actor, key.user.team_id)


@rule(ApiKey, "delete")
def delete_api_key(actor: User, key: ApiKey) -> Optional[str]:
    return _owner_or_team_admin(actor, key)
