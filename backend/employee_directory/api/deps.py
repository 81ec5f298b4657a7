"""API Dependencies — per-request wiring of services, stores, and the caller's session context.

Invariants:
    - Every employee route receives an explicit RequestContext; nothing reads ambient
      session state
    - Missing/invalid bearer token → AuthenticationError (401) before the handler runs
    - A fresh SqlEmployeeStore per request, bound to that request's AsyncSession

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own AuthenticationError so the 401 uses
      the standard error envelope
    - get_asset_store is its own dependency so tests can point it at a temp directory
"""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.config import Settings, get_settings
from employee_directory.core.errors import AuthenticationError
from employee_directory.infrastructure.asset_store import LocalAssetStore
from employee_directory.infrastructure.database import get_db
from employee_directory.infrastructure.employee_store import SqlEmployeeStore
from employee_directory.infrastructure.security import decode_access_token
from employee_directory.services.directory_service import DirectoryService
from employee_directory.services.identity_service import IdentityService

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Identity established upstream of the directory service."""
    username: str


async def require_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> RequestContext:
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    username = decode_access_token(
        credentials.credentials, settings.secret_key, settings.token_algorithm,
    )
    return RequestContext(username=username)


def get_asset_store(settings: Settings = Depends(get_settings)) -> LocalAssetStore:
    return LocalAssetStore(
        settings.upload_dir,
        max_bytes=settings.max_image_bytes,
        allowed_extensions=settings.allowed_image_extensions,
    )


async def get_directory_service(
    db: AsyncSession = Depends(get_db),
    assets: LocalAssetStore = Depends(get_asset_store),
    settings: Settings = Depends(get_settings),
) -> DirectoryService:
    return DirectoryService(
        SqlEmployeeStore(db), assets, max_page_size=settings.max_page_size,
    )


async def get_identity_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> IdentityService:
    return IdentityService(db, settings)
