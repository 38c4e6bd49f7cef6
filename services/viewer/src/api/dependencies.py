from fastapi import Header, HTTPException, Request
from src.services.view_registry import ViewRegistry


def get_registry(request: Request) -> ViewRegistry:
    return request.app.state.registry  # type: ignore[return-value]


def get_bearer_token(authorization: str | None = Header(None)) -> str:
    """Opaque bearer token passed through to the metrics API."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return token.strip()
