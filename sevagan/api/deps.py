"""
API dependencies (service lookup, bearer-token auth).

Provides FastAPI dependencies to reach the per-app services and to read
the caller's bearer token from the Authorization header.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sevagan.core.errors import NotAuthorized
from sevagan.services.container import Services

# auto_error=False: a missing header must surface as 401 NotAuthorized, not 403
security = HTTPBearer(auto_error=False)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Expects:
        Authorization: Bearer <token>
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthorized()
    return credentials.credentials
