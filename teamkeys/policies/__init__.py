from teamkeys.policies.base import PolicyDecision, authorize, can, cannot, check

# Registers the rules
from teamkeys.policies import rules  # noqa: F401

__all__ = ["PolicyDecision", "authorize", "can", "cannot", "check"]
