import json
from typing import Any, Optional

from fastapi import Depends, Request
from pydantic import BaseModel

from portfolio.core.errors import AuthenticationRequired, RequestInvalid
from portfolio.core.security import ACCESS_TOKEN_COOKIE, decode_access_token, is_owner_email


class OwnerIdentity(BaseModel):
    email: str


def _bearer_token(raw_value: str | None) -> str | None:
    if not raw_value:
        return None
    scheme, _, param = raw_value.partition(" ")
    if scheme.lower() != "bearer" or not param:
        return None
    return param.strip()


async def get_current_owner(request: Request) -> Optional[OwnerIdentity]:
    token = _bearer_token(request.cookies.get(ACCESS_TOKEN_COOKIE)) or _bearer_token(
        request.headers.get("authorization")
    )
    if not token:
        return None
    email = decode_access_token(token)
    if not is_owner_email(email):
        return None
    return OwnerIdentity(email=email)


async def require_owner(owner: Optional[OwnerIdentity] = Depends(get_current_owner)) -> OwnerIdentity:
    if owner is None:
        raise AuthenticationRequired()
    return owner


async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or ``None`` when the body is empty or not JSON."""
    try:
        return await request.json()
    except (ValueError, UnicodeDecodeError):
        return None


async def read_json_object(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestInvalid("Request body must be valid JSON")
    if not isinstance(payload, dict):
        raise RequestInvalid("Request body must be a JSON object")
    return payload


def parse_limit(raw_value: str | None) -> int | None:
    if raw_value is None:
        return None
    try:
        limit = int(raw_value)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def parse_bool(raw_value: str | None, default: bool = False) -> bool:
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}
