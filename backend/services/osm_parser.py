"""
Parse OSM API XML into an OsmNode.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Dict

from domain.exceptions import OsmFailureCause, OsmNodeNotFoundError
from domain.models import OsmNode

logger = logging.getLogger(__name__)


def parse_osm_node_xml(xml_text: str, node_id: int) -> OsmNode:
    """Build an OsmNode from the XML returned for ``node_id``.

    The first ``node`` element in the document is used. Missing or
    non-numeric lat/lon and malformed XML are reported as
    OsmNodeNotFoundError, same as a node that does not exist. Tag keys
    are unique; a later duplicate ``k`` overwrites the earlier value.
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, UnicodeError) as exc:
        logger.error("Malformed XML for OSM node %s: %s", node_id, exc)
        raise OsmNodeNotFoundError(node_id, OsmFailureCause.MALFORMED_XML) from exc

    node_el = next(root.iter("node"), None)
    if node_el is None:
        logger.error("No <node> element in OSM response for node %s", node_id)
        raise OsmNodeNotFoundError(node_id, OsmFailureCause.NO_NODE_ELEMENT)

    try:
        lat = float(node_el.attrib["lat"])
        lon = float(node_el.attrib["lon"])
    except (KeyError, ValueError) as exc:
        logger.error(
            "OSM node %s has missing or invalid coordinates: lat=%r lon=%r",
            node_id,
            node_el.get("lat"),
            node_el.get("lon"),
        )
        raise OsmNodeNotFoundError(node_id, OsmFailureCause.BAD_COORDINATES) from exc

    tags: Dict[str, str] = {}
    for tag in node_el.iter("tag"):
        tags[tag.get("k", "")] = tag.get("v", "")

    # Stamp the requested id; the payload's own id attribute is not trusted.
    return OsmNode(node_id=node_id, lat=lat, lon=lon, tags=tags)
