from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/healthz")
async def healthz(request: Request):
    return {"status": "ok", "views": len(request.app.state.registry)}
