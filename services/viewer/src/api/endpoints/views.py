from fastapi import APIRouter, Depends, HTTPException
from src.api.dependencies import get_bearer_token, get_registry
from src.domain.errors import ViewNotFoundError
from src.domain.models import DashboardSnapshot
from src.schemas.views import ChangeWindowRequest, OpenViewRequest, ViewResponse
from src.services.view_registry import ViewRegistry

from shared.constants import RangeToken

router = APIRouter(prefix="/views")


@router.get("/ranges")
async def ranges():
    return {"ranges": RangeToken.all_tokens()}


@router.post("", status_code=201, response_model=ViewResponse)
async def open_view(
    body: OpenViewRequest,
    token: str = Depends(get_bearer_token),
    registry: ViewRegistry = Depends(get_registry),
):
    view_id = await registry.open(body.agent_id, token, body.range, tz=body.tzinfo)
    view = registry.get(view_id)
    return ViewResponse(view_id=view_id, agent_id=view.agent_id, window=view.window)


@router.get("/{view_id}", response_model=DashboardSnapshot)
async def get_view(view_id: str, registry: ViewRegistry = Depends(get_registry)):
    try:
        return registry.get(view_id).snapshot
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{view_id}/window", response_model=ViewResponse)
async def change_window(
    view_id: str,
    body: ChangeWindowRequest,
    registry: ViewRegistry = Depends(get_registry),
):
    try:
        window = registry.change_window(view_id, body.range)
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ViewResponse(
        view_id=view_id, agent_id=registry.get(view_id).agent_id, window=window
    )


@router.delete("/{view_id}", status_code=204)
async def close_view(view_id: str, registry: ViewRegistry = Depends(get_registry)):
    try:
        await registry.close(view_id)
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
