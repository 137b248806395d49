"""
Unit tests for the capability checks.

Rules are exercised on transient model instances, without a database.
"""
import pytest

from teamkeys.core.exceptions import AuthorizationError
from teamkeys.models.enums import UserRole
from teamkeys.policies import PolicyDecision, authorize, can, cannot, check


class TestCreateApiKey:
    """Test cases for createApiKey on a team."""

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.MEMBER])
    def test_member_or_admin_allowed(self, make_team, make_user, role):
        team = make_team()
        user = make_user(team, role)

        assert can(user, "createApiKey", team)

    @pytest.mark.parametrize("role", [UserRole.VIEWER, UserRole.GUEST])
    def test_lesser_roles_denied(self, make_team, make_user, role):
        team = make_team()
        user = make_user(team, role)

        decision = check(user, "createApiKey", team)
        assert not decision.allowed
        assert decision.reason == "member role required"

    def test_other_team_denied(self, make_team, make_user):
        user = make_user(make_team("A"), UserRole.ADMIN)

        assert cannot(user, "createApiKey", make_team("B"))

    def test_suspended_denied(self, make_team, make_user):
        team = make_team()
        user = make_user(team, UserRole.ADMIN, suspended=True)

        assert check(user, "createApiKey", team).reason == "actor suspended"


class TestListApiKeys:
    """Test cases for listApiKeys on teams and users."""

    def test_team_listing_requires_admin(self, make_team, make_user):
        team = make_team()
        admin = make_user(team, UserRole.ADMIN)
        member = make_user(team, UserRole.MEMBER)

        assert can(admin, "listApiKeys", team)
        assert cannot(member, "listApiKeys", team)

    def test_user_may_list_self(self, make_team, make_user):
        team = make_team()
        member = make_user(team, UserRole.MEMBER)

        assert can(member, "listApiKeys", member)

    def test_member_may_not_list_teammate(self, make_team, make_user):
        team = make_team()
        member = make_user(team, UserRole.MEMBER)
        teammate = make_user(team, UserRole.MEMBER)

        assert cannot(member, "listApiKeys", teammate)

    def test_admin_may_list_teammate(self, make_team, make_user):
        team = make_team()
        admin = make_user(team, UserRole.ADMIN)
        teammate = make_user(team, UserRole.MEMBER)

        assert can(admin, "listApiKeys", teammate)

    def test_admin_may_not_list_other_team_user(self, make_team, make_user):
        admin = make_user(make_team("A"), UserRole.ADMIN)
        stranger = make_user(make_team("B"), UserRole.MEMBER)

        decision = check(admin, "listApiKeys", stranger)
        assert not decision.allowed
        assert decision.reason == "different team"


class TestDeleteApiKey:
    """Test cases for delete on an API key."""

    def test_owner_allowed(self, make_team, make_user, make_key):
        member = make_user(make_team(), UserRole.MEMBER)

        assert can(member, "delete", make_key(member))

    def test_team_admin_allowed(self, make_team, make_user, make_key):
        team = make_team()
        admin = make_user(team, UserRole.ADMIN)
        member = make_user(team, UserRole.MEMBER)

        assert can(admin, "delete", make_key(member))

    def test_teammate_denied(self, make_team, make_user, make_key):
        team = make_team()
        member = make_user(team, UserRole.MEMBER)
        teammate = make_user(team, UserRole.MEMBER)

        assert cannot(teammate, "delete", make_key(member))

    def test_other_team_admin_denied(self, make_team, make_user, make_key):
        member = make_user(make_team("A"), UserRole.MEMBER)
        admin = make_user(make_team("B"), UserRole.ADMIN)

        assert cannot(admin, "delete", make_key(member))


class TestCheck:
    """Test cases for the shared check/authorize entry points."""

    def test_missing_target_denied(self, make_team, make_user):
        user = make_user(make_team(), UserRole.ADMIN)

        assert check(user, "delete", None) == PolicyDecision(False, "delete", "no target")

    def test_unknown_action_denied(self, make_team, make_user):
        team = make_team()
        user = make_user(team, UserRole.ADMIN)

        assert cannot(user, "launchRockets", team)

    def test_authorize_raises_on_deny(self, make_team, make_user):
        team = make_team()
        viewer = make_user(team, UserRole.VIEWER)

        with pytest.raises(AuthorizationError) as exc_info:
            authorize(viewer, "createApiKey", team)

        assert exc_info.value.details == {"reason": "member role required"}

    def test_authorize_returns_decision_on_allow(self, make_team, make_user):
        team = make_team()
        member = make_user(team, UserRole.MEMBER)

        decision = authorize(member, "createApiKey", team)

        assert decision.allowed
        assert bool(decision) is True
