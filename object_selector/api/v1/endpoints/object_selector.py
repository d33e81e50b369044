"""Object selector endpoints: search/tree queries and nonce refresh.

The query endpoint takes a form-encoded body (the selector UI posts it like
an admin-ajax request): the anti-forgery nonce, ``post_query_args`` as a JSON
object, and optional ``customized`` preview settings as a JSON object.
"""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from object_selector.api.v1.dependencies import (
    get_capability_checker,
    get_current_caller,
    get_nonce_manager,
    get_object_selector_service,
)
from object_selector.application.dtos.caller import CallerIdentity
from object_selector.application.dtos.result import TreeQueryResult
from object_selector.application.use_cases.object_selector_query import (
    ObjectSelectorQueryService,
)
from object_selector.core.limiter import limit_queries
from object_selector.domain.exceptions import (
    BadNonceException,
    InvalidPostQueryArgsException,
    MissingPostQueryArgsException,
)
from object_selector.infrastructure.security.nonce import NonceManager
from object_selector.infrastructure.services import RoleCapabilityChecker
from object_selector.schemas.object_selector import (
    FlatQueryResponse,
    NonceResponse,
    ObjectSelectorErrorResponse,
    ObjectSelectorQueryResponse,
    TreeQueryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

QUERY_ACTION = "customize_object_selector_query"
NONCE_FIELD = "customize_object_selector_query_nonce"


def _decode_post_query_args(raw: Any) -> dict[str, Any]:
    """Decode the JSON object in post_query_args; anything else is invalid."""
    if not isinstance(raw, str):
        raise InvalidPostQueryArgsException()
    try:
        value = json.loads(raw)
    except ValueError as e:
        raise InvalidPostQueryArgsException() from e
    if not isinstance(value, dict):
        raise InvalidPostQueryArgsException()
    return value


def _decode_customized(raw: Any) -> dict[str, Any]:
    """Decode preview settings; absent or malformed input means no preview."""
    if not raw or not isinstance(raw, str):
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring undecodable customized settings")
        return {}
    return value if isinstance(value, dict) else {}


@router.post(
    "/query",
    response_model=ObjectSelectorQueryResponse,
    responses={400: {"description": "Rejected query", "model": ObjectSelectorErrorResponse}},
)
@limit_queries
async def query_objects(
    request: Request,
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    capabilities: Annotated[RoleCapabilityChecker, Depends(get_capability_checker)],
    nonce_manager: Annotated[NonceManager, Depends(get_nonce_manager)],
    service: Annotated[ObjectSelectorQueryService, Depends(get_object_selector_service)],
) -> ObjectSelectorQueryResponse:
    """Run a selector query. Flat mode pages results; tree mode returns the whole hierarchy."""
    form = await request.form()
    if not nonce_manager.verify_nonce(form.get(NONCE_FIELD), QUERY_ACTION, caller.user_id):
        raise BadNonceException()
    raw_args = form.get("post_query_args")
    if raw_args is None:
        raise MissingPostQueryArgsException()
    post_query_args = _decode_post_query_args(raw_args)
    customized = _decode_customized(form.get("customized"))

    result = await service.run(post_query_args, capabilities, customized)
    if isinstance(result, TreeQueryResult):
        return ObjectSelectorQueryResponse(data=TreeQueryResponse.from_result(result))
    return ObjectSelectorQueryResponse(data=FlatQueryResponse.from_result(result))


@router.get("/nonces", response_model=NonceResponse)
def refresh_nonces(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    nonce_manager: Annotated[NonceManager, Depends(get_nonce_manager)],
) -> NonceResponse:
    """Return a fresh query nonce for the current caller."""
    return NonceResponse(
        customize_object_selector_query=nonce_manager.create_nonce(QUERY_ACTION, caller.user_id)
    )
