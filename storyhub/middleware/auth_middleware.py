"""Caller identity resolution from the virtual-user header or a bearer token's claims.

Two schemes are accepted:

* ``X-Virtual-User-ID`` carries an opaque, client-chosen id for anonymous
  (pre-login) callers.
* ``Authorization: Bearer <header>.<payload>.<signature>`` carries a JWT issued
  by the upstream identity provider. Only the payload is read; the signature is
  NOT verified here, so the bearer scheme is a claims-extraction convenience
  rather than a trust boundary.

When both headers are present the bearer subject wins, and an unusable bearer
token falls back to the virtual user id.
"""

import binascii
import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Header, Request
from jose import JWTError
from jose.utils import base64url_decode

from storyhub.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

VIRTUAL_USER_HEADER = "X-Virtual-User-ID"
BEARER_PREFIX = "Bearer "
SUBJECT_CLAIMS = ("uid", "sub", "user_id", "email")


class AuthScheme(str, enum.Enum):
    VIRTUAL = "virtual"
    BEARER = "jwt"


@dataclass(frozen=True)
class Identity:
    subject: str
    scheme: AuthScheme

    def __eq__(self, other: object) -> bool:
        # the scheme is informational; two identities are the same caller iff subjects match
        if not isinstance(other, Identity):
            return NotImplemented
        return self.subject == other.subject

    def __hash__(self) -> int:
        return hash(self.subject)


def decode_base64url(segment: str) -> bytes:
    return base64url_decode(segment.encode("ascii"))


def read_unverified_claims(authorization: str) -> Optional[dict[str, Any]]:
    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Bearer token rejected: missing 'Bearer ' prefix")
        return None

    parts = authorization[len(BEARER_PREFIX):].split(".")
    if len(parts) != 3:
        logger.warning("Bearer token rejected: expected 3 segments, got %d", len(parts))
        return None

    try:
        payload = decode_base64url(parts[1])
    except (JWTError, binascii.Error, ValueError) as exc:
        logger.warning("Bearer token rejected: payload is not base64url (%s)", exc)
        return None

    try:
        claims = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Bearer token rejected: payload is not JSON (%s)", exc)
        return None

    if not isinstance(claims, dict):
        logger.warning("Bearer token rejected: payload is not a JSON object")
        return None
    return claims


def extract_bearer_subject(authorization: str) -> str:
    """Return the caller id carried by a bearer token, or ``""`` when there is none."""
    claims = read_unverified_claims(authorization)
    if claims is None:
        return ""

    for name in SUBJECT_CLAIMS:
        value = claims.get(name)
        if isinstance(value, str) and value:
            logger.debug("Bearer subject taken from '%s' claim", name)
            return value

    logger.warning("Bearer token carries none of the claims %s", ", ".join(SUBJECT_CLAIMS))
    return ""


def resolve_identity(virtual_user_id: Optional[str], authorization: Optional[str]) -> Identity:
    if not virtual_user_id and not authorization:
        raise UnauthenticatedError(
            f"Missing authentication, please provide {VIRTUAL_USER_HEADER} or Authorization"
        )

    if authorization:
        subject = extract_bearer_subject(authorization)
        if subject:
            return Identity(subject=subject, scheme=AuthScheme.BEARER)
        if virtual_user_id:
            logger.info("Bearer token unusable, falling back to virtual user id")
            return Identity(subject=virtual_user_id, scheme=AuthScheme.VIRTUAL)
        raise UnauthenticatedError("Invalid authentication information provided")

    return Identity(subject=virtual_user_id, scheme=AuthScheme.VIRTUAL)


def get_current_identity(
    request: Request,
    x_virtual_user_id: Optional[str] = Header(None, alias=VIRTUAL_USER_HEADER),
    authorization: Optional[str] = Header(None),
) -> Identity:
    try:
        identity = resolve_identity(x_virtual_user_id, authorization)
    except UnauthenticatedError:
        logger.warning(
            "Unauthenticated request %s %s from %s",
            request.method,
            request.url.path,
            request.client.host if request.client else "-",
        )
        raise

    logger.info(
        "Authenticated %s via %s scheme on %s",
        identity.subject,
        identity.scheme.value,
        request.url.path,
    )
    request.state.identity = identity
    return identity
