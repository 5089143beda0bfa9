from __future__ import annotations

import hmac
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from credregistry.core.config import SETTINGS

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def require_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> None:
    """Guard for privileged operations (issue, renew, revoke, share).

    The registry has a single shared secret, API_TOKEN, sent as a bearer
    token.  Used as ``dependencies=[Depends(require_token)]``.
    """
    if credentials is None:
        logger.warning("Missing bearer token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not hmac.compare_digest(
        credentials.credentials.encode(), SETTINGS.api_token.encode()
    ):
        logger.warning("Invalid bearer token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
