"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the authenticated caller and the
selector use case. Routes depend only on these dependencies, never on
infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from object_selector.application.dtos.caller import CallerIdentity
from object_selector.application.services.hooks import SelectorHooks
from object_selector.application.services.query_validator import PostQueryValidator
from object_selector.application.services.result_serializer import ResultSerializer
from object_selector.application.use_cases.object_selector_query import (
    ObjectSelectorQueryService,
)
from object_selector.core.config import get_settings
from object_selector.infrastructure.persistence.database import get_db
from object_selector.infrastructure.persistence.repositories import PostRepository
from object_selector.infrastructure.security.jwt import verify_token
from object_selector.infrastructure.security.nonce import NonceManager
from object_selector.infrastructure.services import (
    AttachmentResolver,
    ContentRegistry,
    RoleCapabilityChecker,
)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_caller_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CallerIdentity | None:
    """Return the caller from the JWT if present and valid; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    role = payload.get("role")
    return CallerIdentity(user_id=str(payload["sub"]), role=str(role) if role else None)


async def get_current_caller(
    caller: Annotated[CallerIdentity | None, Depends(get_current_caller_optional)],
) -> CallerIdentity:
    """Return the caller from the JWT; raise 401 if missing or invalid."""
    if caller is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return caller


def get_capability_checker(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
) -> RoleCapabilityChecker:
    """Capabilities of the current caller's role."""
    return RoleCapabilityChecker.for_role(caller.role)


def get_content_registry(request: Request) -> ContentRegistry:
    """App-wide post type/status registry (built in create_app)."""
    return request.app.state.registry


def get_selector_hooks(request: Request) -> SelectorHooks:
    """App-wide preview callbacks and attachment id filters (built in create_app)."""
    return request.app.state.hooks


def get_nonce_manager() -> NonceManager:
    """Nonce issuing/verification keyed by the app secret (composition root)."""
    settings = get_settings()
    return NonceManager(
        settings.secret_key.get_secret_value(),
        lifetime_seconds=settings.nonce_lifetime_seconds,
    )


async def get_post_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostRepository:
    """Read-only post repository on the request session."""
    return PostRepository(db)


async def get_object_selector_service(
    post_repo: Annotated[PostRepository, Depends(get_post_repo)],
    registry: Annotated[ContentRegistry, Depends(get_content_registry)],
    hooks: Annotated[SelectorHooks, Depends(get_selector_hooks)],
) -> ObjectSelectorQueryService:
    """Build ObjectSelectorQueryService (composition root)."""
    settings = get_settings()
    serializer = ResultSerializer(
        registry,
        hooks,
        AttachmentResolver(post_repo, settings.uploads_base_url),
    )
    return ObjectSelectorQueryService(
        validator=PostQueryValidator(),
        post_repo=post_repo,
        registry=registry,
        serializer=serializer,
        hooks=hooks,
        default_posts_per_page=settings.default_posts_per_page,
    )
