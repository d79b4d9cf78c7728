from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from src.data_models.entity_schemas import (
    BatchResolveRequest,
    BatchResolveResponse,
    ResolutionResult,
    ResolveRequest,
)
from src.resolution.bootstrap import ResolverRuntime
from src.resolution.exceptions import EntityResolverError
from src.routers.deps import _raise_http, get_runtime, require_api_key
from src.utils.logger import logger


router = APIRouter(prefix="/resolve", tags=["resolve"], dependencies=[Depends(require_api_key)])


@router.post("/debank/tool-args")
async def resolve_debank_tool_args(
    args: Dict[str, Any] = Body(...),
    runtime: ResolverRuntime = Depends(get_runtime),
) -> Dict[str, Any]:
    """Rewrite free-text chain names and token keywords in DeBank tool arguments."""
    logger.info("Router: resolving DeBank tool args: %s", sorted(args))
    return await runtime.debank.resolve_tool_args(dict(args))


@router.post("", response_model=BatchResolveResponse)
async def resolve_batch(
    body: BatchResolveRequest,
    runtime: ResolverRuntime = Depends(get_runtime),
) -> BatchResolveResponse:
    return await runtime.defillama.resolve_entities(body)


@router.post("/{entity_type}", response_model=ResolutionResult)
async def resolve_entity(
    entity_type: str,
    body: ResolveRequest,
    runtime: ResolverRuntime = Depends(get_runtime),
) -> ResolutionResult:
    if entity_type == "debank_chains":
        resolve = runtime.debank.resolve_chain
    else:
        try:
            resolve = runtime.defillama.resolver_for(entity_type)
        except EntityResolverError as e:
            _raise_http(e)

    resolved = await resolve(body.query)
    return ResolutionResult(query=body.query, entity_type=entity_type, resolved=resolved)
