"""
Map an OsmNode onto a candidate Pos.

Required tags are checked in a fixed order and the first missing one aborts
the conversion, so the reported failure is deterministic. Description and
type are derived from ordered rule lists where the first matching rule wins.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from domain.exceptions import OsmNodeMissingFieldsError
from domain.models import DEFAULT_CAMPUS, CampusType, OsmNode, Pos, PosType

logger = logging.getLogger(__name__)

TAG_NAME = "name"
TAG_STREET = "addr:street"
TAG_HOUSE_NUMBER = "addr:housenumber"
TAG_POSTCODE = "addr:postcode"
TAG_CITY = "addr:city"
TAG_WEBSITE = "website"
TAG_OPENING_HOURS = "opening_hours"

REQUIRED_TAGS: Tuple[str, ...] = (
    TAG_NAME,
    TAG_STREET,
    TAG_HOUSE_NUMBER,
    TAG_POSTCODE,
    TAG_CITY,
)

DEFAULT_DESCRIPTION = "Imported from OpenStreetMap"
DEFAULT_POS_TYPE = PosType.CAFE

# (tag key, lower-cased values, resulting type); amenity rules come first.
POS_TYPE_RULES: List[Tuple[str, frozenset, PosType]] = [
    ("amenity", frozenset({"cafe", "coffee_shop"}), PosType.CAFE),
    ("amenity", frozenset({"canteen", "food_court"}), PosType.CAFETERIA),
    ("shop", frozenset({"bakery"}), PosType.BAKERY),
    ("shop", frozenset({"coffee", "cafe"}), PosType.CAFE),
]

_POSTCODE_RE = re.compile(r"[+-]?[0-9]+")

CampusResolver = Callable[[OsmNode], CampusType]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _present(tags: Dict[str, str], key: str) -> Optional[str]:
    value = tags.get(key)
    return None if _is_blank(value) else value


def parse_postal_code(raw: str) -> Optional[int]:
    """Parse a postcode tag as an integer, or None if it is not one."""
    text = raw.strip()
    if not _POSTCODE_RE.fullmatch(text):
        return None
    return int(text)


def _describe_website_and_hours(tags: Dict[str, str]) -> Optional[str]:
    website = _present(tags, TAG_WEBSITE)
    hours = _present(tags, TAG_OPENING_HOURS)
    if website and hours:
        return f"Website: {website} | Opening hours: {hours}"
    return None


def _describe_website(tags: Dict[str, str]) -> Optional[str]:
    website = _present(tags, TAG_WEBSITE)
    return f"Website: {website}" if website else None


def _describe_opening_hours(tags: Dict[str, str]) -> Optional[str]:
    hours = _present(tags, TAG_OPENING_HOURS)
    return f"Opening hours: {hours}" if hours else None


DESCRIPTION_RULES: List[Callable[[Dict[str, str]], Optional[str]]] = [
    _describe_website_and_hours,
    _describe_website,
    _describe_opening_hours,
]


def build_description(tags: Dict[str, str]) -> str:
    for rule in DESCRIPTION_RULES:
        description = rule(tags)
        if description is not None:
            return description
    return DEFAULT_DESCRIPTION


def determine_pos_type(tags: Dict[str, str]) -> PosType:
    for key, values, pos_type in POS_TYPE_RULES:
        value = tags.get(key)
        if value is not None and value.lower() in values:
            return pos_type
    logger.debug("Could not determine POS type from tags, defaulting to %s", DEFAULT_POS_TYPE.value)
    return DEFAULT_POS_TYPE


def default_campus_resolver(node: OsmNode) -> CampusType:
    """Always the default campus; swap in a coordinate-based resolver later."""
    return DEFAULT_CAMPUS


def convert_osm_node_to_pos(
    node: OsmNode,
    campus_resolver: CampusResolver = default_campus_resolver,
) -> Pos:
    """Convert an OSM node into a Pos candidate (no id, no timestamps).

    Raises OsmNodeMissingFieldsError naming the node when a required tag is
    blank or the postcode is not an integer.
    """
    tags = node.tags

    values: Dict[str, str] = {}
    for key in REQUIRED_TAGS:
        value = _present(tags, key)
        if value is None:
            logger.error("OSM node %s is missing required '%s' tag", node.node_id, key)
            raise OsmNodeMissingFieldsError(node.node_id)
        if key == TAG_POSTCODE and parse_postal_code(value) is None:
            logger.error("OSM node %s has invalid postal code: %r", node.node_id, value)
            raise OsmNodeMissingFieldsError(node.node_id)
        values[key] = value

    postal_code = parse_postal_code(values[TAG_POSTCODE])
    description = build_description(tags)
    pos_type = determine_pos_type(tags)
    campus = campus_resolver(node)

    logger.debug(
        "Converting OSM node %s to POS: name=%s, type=%s, campus=%s",
        node.node_id,
        values[TAG_NAME],
        pos_type.value,
        campus.value,
    )

    return Pos(
        name=values[TAG_NAME],
        description=description,
        type=pos_type,
        campus=campus,
        street=values[TAG_STREET],
        house_number=values[TAG_HOUSE_NUMBER],
        postal_code=postal_code,
        city=values[TAG_CITY],
    )
