"""
Domain errors raised by the POS services and repositories.
"""
from enum import Enum


class PosDomainError(Exception):
    """Base class for POS domain errors."""


class PosNotFoundError(PosDomainError):
    def __init__(self, pos_id: int) -> None:
        self.pos_id = pos_id
        super().__init__(f"POS with ID {pos_id} does not exist")


class DuplicatePosNameError(PosDomainError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"POS with name '{name}' already exists")


class OsmFailureCause(str, Enum):
    """Why an OSM node could not be obtained. Used for logging only."""
    HTTP_STATUS = "http_status"
    EMPTY_BODY = "empty_body"
    NOT_XML = "not_xml"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"
    MALFORMED_XML = "malformed_xml"
    NO_NODE_ELEMENT = "no_node_element"
    BAD_COORDINATES = "bad_coordinates"


class OsmNodeNotFoundError(PosDomainError):
    """The OSM API could not supply usable markup for a node.

    All fetch and parse failures collapse into this one error; ``cause`` keeps
    the detail for diagnostics.
    """

    def __init__(self, node_id: int, cause: OsmFailureCause = OsmFailureCause.UNEXPECTED) -> None:
        self.node_id = node_id
        self.cause = cause
        super().__init__(f"OpenStreetMap node with ID {node_id} does not exist")


class OsmNodeMissingFieldsError(PosDomainError):
    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(
            f"OpenStreetMap node with ID {node_id} does not have all required fields"
        )
