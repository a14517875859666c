"""Signature generation for Cloudinary direct (browser-side) uploads."""

import hashlib
import math
from typing import Any, Mapping

from storyhub.errors import InvalidInputError

EXCLUDED_PARAMS = {"file", "api_key"}


def _render_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInputError(f"Cannot sign non-finite number {value}")
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def build_signing_string(params_to_sign: Mapping[str, Any]) -> str:
    keys = sorted(k for k in params_to_sign if k not in EXCLUDED_PARAMS)
    return "&".join(f"{k}={_render_value(params_to_sign[k])}" for k in keys)


def sign_request(params_to_sign: Mapping[str, Any], api_secret: str) -> str:
    """Return the SHA-1 hex signature Cloudinary expects for ``params_to_sign``."""
    payload = build_signing_string(params_to_sign) + api_secret
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()
