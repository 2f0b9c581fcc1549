"""SecureToken signing and verification endpoints."""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from wowza_token.config import Settings, get_settings
from wowza_token.signing import TokenError, TokenSpec, verify_signed_url
from wowza_token.api.ratelimit import (
    RATE_LIMIT_SIGN,
    RATE_LIMIT_VERIFY,
    get_client_address,
    limiter,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)


async def require_api_key(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> None:
    """
    Dependency that requires the configured API key as a bearer token.

    Raises:
        HTTPException 503: No API key configured
        HTTPException 401: No token provided
        HTTPException 403: Token does not match the API key
    """
    settings = get_settings()
    if not settings.api_key:
        raise HTTPException(
            status_code=503,
            detail="API key not configured",
        )

    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="API key required. Use Authorization: Bearer <api_key>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not hmac.compare_digest(
        credentials.credentials.encode("utf-8"),
        settings.api_key.encode("utf-8"),
    ):
        logger.warning("Rejected sign request with invalid API key")
        raise HTTPException(status_code=403, detail="Invalid API key")


class SignRequest(BaseModel):
    """Request to sign a playback URL."""
    url: str
    params: dict[str, str] = Field(default_factory=dict)  # e.g. starttime, endtime
    client_ip: str | None = None
    bind_requester_ip: bool = False  # Use the caller's own address as client_ip
    hash_algorithm: str | None = None
    prefix: str | None = None


class SignResponse(BaseModel):
    """Signed playback URL."""
    signed_url: str
    token: str
    prefix: str
    hash_algorithm: str


class VerifyRequest(BaseModel):
    """Request to check a signed playback URL."""
    signed_url: str
    client_ip: str | None = None
    hash_algorithm: str | None = None
    prefix: str | None = None


class VerifyResponse(BaseModel):
    """Verification result."""
    valid: bool
    error: str | None = None


def _require_secret(settings: Settings) -> str:
    """Get the configured shared secret or fail with 503."""
    if not settings.shared_secret:
        raise HTTPException(
            status_code=503,
            detail="SecureToken shared secret not configured",
        )
    return settings.shared_secret


@router.post("/sign", response_model=SignResponse, dependencies=[Depends(require_api_key)])
@limiter.limit(RATE_LIMIT_SIGN)
async def sign_url(request: Request, body: SignRequest):
    """
    Sign a playback URL for the media server.

    The shared secret always comes from configuration. Prefix and hash
    algorithm default to the configured values. Requires the API key as a
    bearer token.
    """
    settings = get_settings()
    secret = _require_secret(settings)

    client_ip = body.client_ip
    if body.bind_requester_ip:
        client_ip = get_client_address(request)

    try:
        spec = TokenSpec(body.prefix or settings.prefix, secret)
        spec.set_url(body.url)
        spec.set_hash_algorithm(body.hash_algorithm or settings.hash_algorithm)
        if client_ip is not None:
            spec.set_client_ip(client_ip)
        spec.set_extra_params(body.params)
        signed_url = spec.build_signed_url()
        token = signed_url.rpartition(f"&{spec.prefix}hash=")[2]
    except TokenError as e:
        logger.warning(f"Rejected sign request for {body.url}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"Signed playback URL for path {spec.url_path}")

    return SignResponse(
        signed_url=signed_url,
        token=token,
        prefix=spec.prefix,
        hash_algorithm=spec.hash_algorithm.name,
    )


@router.post("/verify", response_model=VerifyResponse)
@limiter.limit(RATE_LIMIT_VERIFY)
async def verify_url(request: Request, body: VerifyRequest):
    """Check that a signed playback URL carries a valid hash."""
    settings = get_settings()
    secret = _require_secret(settings)

    try:
        is_valid, error = verify_signed_url(
            body.signed_url,
            prefix=body.prefix or settings.prefix,
            shared_secret=secret,
            client_ip=body.client_ip,
            hash_algorithm=body.hash_algorithm or settings.hash_algorithm,
        )
    except TokenError as e:
        logger.warning(f"Rejected verify request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    if not is_valid:
        logger.info(f"Signed URL failed verification: {error}")

    return VerifyResponse(valid=is_valid, error=error)
