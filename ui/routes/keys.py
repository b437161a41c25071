"""ApiKey routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1/keys", tags=["keys"])

# These will be set by app.py
_api_keys = None


def init(api_keys):
    """Initialize with the ApiKey format."""
    global _api_keys
    _api_keys = api_keys


class KeyCreateRequest(BaseModel):
    type: str
    env: str
    marketplace_id: str
    zone: Optional[str] = None


class KeyParseRequest(BaseModel):
    key: str


@router.post("")
async def create_key(body: KeyCreateRequest, username=Depends(verify_basic_auth)):
    """Generate a new ApiKey (requires basic auth)."""
    key = await _api_keys.generate(type=body.type, env=body.env, marketplace_id=body.marketplace_id,
                                   zone=body.zone)
    return {"key": key}


@router.post("/parse")
async def parse_key(body: KeyParseRequest):
    """Decode an ApiKey. Invalid keys are reported, never rejected."""
    parsed = _api_keys.parse(body.key)
    return {**parsed.to_dict(), "base_key": _api_keys.get_base_key(body.key)}
