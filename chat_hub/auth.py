import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chat_hub.logging import logger
from chat_hub.settings import app_settings

bearer_scheme = HTTPBearer(auto_error=False)


async def require_admin_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> None:
    """
    FastAPI dependency guarding the admin endpoints with a bearer token.

    The token is compared in constant time against ``ADMIN_BEARER_TOKEN``.
    Chat participants are not authenticated; only admin routes use this.

    Args:
        credentials: Parsed ``Authorization: Bearer <token>`` header, or None
            if the header is missing or uses another scheme.

    Raises:
        HTTPException: 401 if the token is missing or does not match.
    """
    expected = app_settings.ADMIN_BEARER_TOKEN.get_secret_value()

    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), expected.encode()
    ):
        logger.warning("Rejected admin request with missing or invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
