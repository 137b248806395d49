"""
Capability checks.

A rule is registered per (target type, action) pair and answers a single
question: may ``actor`` perform ``action`` on ``target``? ``check`` is the
only place rules are evaluated; ``authorize`` and ``can``/``cannot`` are
thin views over its result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

from teamkeys.core.exceptions import AuthorizationError

logger = logging.getLogger(__name__)

Rule = Callable[[Any, Any], Optional[str]]

_rules: Dict[Tuple[Type, str], Rule] = {}


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of a capability check. ``reason`` explains a denial."""

    allowed: bool
    action: str
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


def rule(model: Type, action: str) -> Callable[[Rule], Rule]:
    """
    Register a rule for ``action`` on instances of ``model``.

    The rule returns None to allow, or a short denial reason.
    """

    def decorator(fn: Rule) -> Rule:
        _rules[(model, action)] = fn
        return fn

    return decorator


def check(actor, action: str, target) -> PolicyDecision:
    """Evaluate the rule for (actor, action, target) without raising."""
    if actor is None:
        return PolicyDecision(False, action, "no actor")
    if target is None:
        return PolicyDecision(False, action, "no target")

    fn = _rules.get((type(target), action))
    if fn is None:
        return PolicyDecision(False, action, f"no rule for {action} on {type(target).__name__}")

    reason = fn(actor, target)
    return PolicyDecision(reason is None, action, reason)


def authorize(actor, action: str, target) -> PolicyDecision:
    """Evaluate the rule and raise AuthorizationError on denial."""
    decision = check(actor, action, target)
    if not decision.allowed:
        logger.info(f"Denied {action} for user {getattr(actor, 'id', None)}: {decision.reason}")
        raise AuthorizationError(reason=decision.reason)
    return decision


def can(actor, action: str, target) -> bool:
    return check(actor, action, target).allowed


def cannot(actor, action: str, target) -> bool:
    return not check(actor, action, target).allowed
