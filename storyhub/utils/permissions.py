"""Ownership checks applied before mutating user-owned records."""

import enum


class AccessDecision(str, enum.Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(resource_owner_id: str, caller_subject: str) -> AccessDecision:
    # exact, case-sensitive comparison; no normalisation of either side
    if resource_owner_id == caller_subject:
        return AccessDecision.ALLOWED
    return AccessDecision.DENIED


def is_owner(resource_owner_id: str, caller_subject: str) -> bool:
    return authorize(resource_owner_id, caller_subject) is AccessDecision.ALLOWED
