import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from portfolio.core.access import OwnerIdentity, get_current_owner, read_json_body
from portfolio.core.config import settings
from portfolio.core.envelope import envelope_response, api_response
from portfolio.core.errors import AuthenticationRequired
from portfolio.core.security import ACCESS_TOKEN_COOKIE, create_access_token, verify_owner_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(request: Request, response: Response):
    body = await read_json_body(request)
    body = body if isinstance(body, dict) else {}
    email = body.get("email")
    password = body.get("password")

    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        return envelope_response(False, error="Email and password are required", status_code=400)

    if not verify_owner_credentials(email, password):
        logger.warning("Rejected dashboard login for %s", email)
        return envelope_response(False, error="Invalid login credentials", status_code=401)

    access_token = create_access_token(subject=email.strip().lower())
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=f"Bearer {access_token}",
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return api_response(True, {"user": {"email": email.strip().lower()}}, message="Login successful")


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE)
    return api_response(True, None, message="Logout successful")


@router.get("/user")
async def current_user(owner: Optional[OwnerIdentity] = Depends(get_current_owner)):
    if owner is None:
        raise AuthenticationRequired()
    return api_response(True, {"user": owner.model_dump()})
