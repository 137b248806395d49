from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"
    GUEST = "guest"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, other: "UserRole") -> bool:
        """True when this role grants everything ``other`` does."""
        return self.rank >= other.rank


_ROLE_RANK = {
    UserRole.GUEST: 0,
    UserRole.VIEWER: 1,
    UserRole.MEMBER: 2,
    UserRole.ADMIN: 3,
}


class AuthenticationType(str, Enum):
    # JWT issued to the first-party application
    APP = "app"
    # Request signed with a user's API key
    API = "api"
