"""Auth Routes — register and login for the directory's username/password session.

Invariants:
    - Passwords never appear in responses or logs
    - Login returns a bearer token the client sends on every employee request
"""

import logging

from fastapi import APIRouter, Depends, status

from employee_directory.api.deps import get_identity_service
from employee_directory.schemas.auth import Credentials, TokenResponse
from employee_directory.schemas.employee import MessageResponse
from employee_directory.services.identity_service import IdentityService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: Credentials,
    identity: IdentityService = Depends(get_identity_service),
):
    await identity.register(body.username, body.password)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(
    body: Credentials,
    identity: IdentityService = Depends(get_identity_service),
):
    token = await identity.login(body.username, body.password)
    return TokenResponse(access_token=token, username=body.username)
