"""Record persistence route."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from nlp_gateway.core.auth import require_api_key
from nlp_gateway.core.errors import GatewayError
from nlp_gateway.core.events import get_record_store
from nlp_gateway.services.record_store import RecordStore

router = APIRouter(tags=["Records"], dependencies=[Depends(require_api_key)])


class RecordResponse(BaseModel):
    id: str


@router.post("/record", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def put_record(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Persist a JSON object to the key-value store."""
    try:
        body = json.loads(await request.body())
    except ValueError:
        raise GatewayError(status.HTTP_400_BAD_REQUEST, "Request body must be valid JSON") from None

    if not isinstance(body, dict):
        raise GatewayError(status.HTTP_400_BAD_REQUEST, "Record must be a JSON object")

    rid = await store.put(body)
    return RecordResponse(id=rid)
