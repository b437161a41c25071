"""Object id routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1/object-ids", tags=["object-ids"])

# These will be set by app.py
_object_ids = None


def init(object_ids):
    """Initialize with the object id format."""
    global _object_ids
    _object_ids = object_ids


class ObjectIdCreateRequest(BaseModel):
    prefix: str
    marketplace_id: str
    env: str = "test"
    zone: Optional[str] = None
    separator: str = "_"


@router.post("")
async def create_object_id(body: ObjectIdCreateRequest, username=Depends(verify_basic_auth)):
    """Generate a new object id (requires basic auth)."""
    object_id = await _object_ids.generate(prefix=body.prefix, marketplace_id=body.marketplace_id,
                                           separator=body.separator, env=body.env, zone=body.zone)
    return {"id": object_id}


@router.get("/{object_id}")
async def extract_object_id(object_id: str):
    """Decode object id metadata. DecodeError is mapped to 400 by the app."""
    return _object_ids.extract_data(object_id).to_dict()
