"""
POS API routes.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel

from db import SessionLocal
from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
    PosNotFoundError,
)
from domain.models import CampusType, Pos, PosType
from services.pos_service import PosService

router = APIRouter()
pos_service = PosService()
logger = logging.getLogger(__name__)


class PosPayload(BaseModel):
    id: Optional[int] = None
    name: str
    description: str
    type: PosType
    campus: CampusType
    street: str
    house_number: str
    postal_code: int
    city: str


class PosResponse(BaseModel):
    id: int
    name: str
    description: str
    type: str
    campus: str
    street: str
    house_number: str
    postal_code: int
    city: str
    created_at: str
    updated_at: str


def pos_to_response(pos: Pos) -> PosResponse:
    """Convert domain Pos to API response."""
    return PosResponse(
        id=pos.id,
        name=pos.name,
        description=pos.description,
        type=pos.type.value,
        campus=pos.campus.value,
        street=pos.street,
        house_number=pos.house_number,
        postal_code=pos.postal_code,
        city=pos.city,
        created_at=pos.created_at.isoformat(),
        updated_at=pos.updated_at.isoformat(),
    )


def payload_to_pos(data: PosPayload) -> Pos:
    return Pos(
        id=data.id,
        name=data.name,
        description=data.description,
        type=data.type,
        campus=data.campus,
        street=data.street,
        house_number=data.house_number,
        postal_code=data.postal_code,
        city=data.city,
    )


def _upsert_or_raise(pos: Pos) -> PosResponse:
    with SessionLocal() as session:
        try:
            saved = pos_service.upsert(session, pos)
        except PosNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except DuplicatePosNameError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return pos_to_response(saved)


@router.get("", response_model=List[PosResponse])
def list_pos():
    """List all points of sale."""
    with SessionLocal() as session:
        return [pos_to_response(p) for p in pos_service.get_all(session)]


@router.get("/{pos_id}", response_model=PosResponse)
def get_pos(pos_id: int):
    """Get a point of sale by ID."""
    with SessionLocal() as session:
        try:
            pos = pos_service.get_by_id(session, pos_id)
        except PosNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return pos_to_response(pos)


@router.post("", response_model=PosResponse, status_code=201)
def create_pos(data: PosPayload):
    """Create a new point of sale."""
    if data.id is not None:
        raise HTTPException(status_code=400, detail="POS ID must not be set when creating a POS")
    return _upsert_or_raise(payload_to_pos(data))


@router.put("/{pos_id}", response_model=PosResponse)
def update_pos(pos_id: int, data: PosPayload):
    """Update an existing point of sale."""
    if data.id != pos_id:
        raise HTTPException(status_code=400, detail="POS ID in path and body do not match")
    return _upsert_or_raise(payload_to_pos(data))


@router.delete("")
def clear_pos():
    """Delete all points of sale."""
    with SessionLocal() as session:
        pos_service.clear(session)
    return {"status": "cleared"}


@router.post("/import/osm/{node_id}", response_model=PosResponse, status_code=201)
def import_from_osm(node_id: int = Path(..., gt=0)):
    """Import a point of sale from an OpenStreetMap node."""
    with SessionLocal() as session:
        try:
            pos = pos_service.import_from_osm_node(session, node_id)
        except OsmNodeNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except OsmNodeMissingFieldsError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except DuplicatePosNameError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return pos_to_response(pos)
