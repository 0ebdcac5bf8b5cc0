import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from task_api.config import Settings, get_settings
from task_api.logger import logger

BEARER_PREFIX = "Bearer "


async def require_api_key(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Check the Authorization header against the configured API key.
    Accepts both "Bearer <key>" and a bare "<key>".
    """
    if not settings.api_key:
        logger.error("API_KEY environment variable is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is required",
        )

    provided_key = authorization
    if provided_key.startswith(BEARER_PREFIX):
        provided_key = provided_key[len(BEARER_PREFIX):]

    if not secrets.compare_digest(provided_key.encode(), settings.api_key.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return provided_key
