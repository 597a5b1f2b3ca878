"""
Core domain models for the campus POS backend.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class PosType(str, Enum):
    """Kind of point of sale."""
    CAFE = "CAFE"
    CAFETERIA = "CAFETERIA"
    VENDING_MACHINE = "VENDING_MACHINE"
    BAKERY = "BAKERY"


class CampusType(str, Enum):
    """Campus regions a point of sale can belong to."""
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"


# Assigned to every imported POS until a coordinate-based resolver exists.
DEFAULT_CAMPUS = CampusType.ALTSTADT


@dataclass
class OsmNode:
    """
    An OpenStreetMap node as returned by the OSM API.

    Only lives between parsing and mapping; it is never persisted.
    node_id always equals the ID that was requested.
    """
    node_id: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class Pos:
    """
    A point of sale on campus.

    Candidates built by the OSM mapper carry no id or timestamps; the
    repository assigns them on first save.
    """
    name: str
    description: str
    type: PosType
    campus: CampusType
    street: str
    house_number: str
    postal_code: int
    city: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
