"""
POS business logic, including the OpenStreetMap import pipeline.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
)
from domain.models import Pos
from repositories import PosRepository
from services.osm_client import OsmClient, get_default_osm_client
from services.osm_parser import parse_osm_node_xml
from services.pos_mapper import CampusResolver, convert_osm_node_to_pos, default_campus_resolver

logger = logging.getLogger(__name__)


class PosService:
    def __init__(
        self,
        repository: Optional[PosRepository] = None,
        osm_client: Optional[OsmClient] = None,
        campus_resolver: CampusResolver = default_campus_resolver,
    ):
        self.repository = repository or PosRepository()
        self._osm_client = osm_client
        self.campus_resolver = campus_resolver

    @property
    def osm_client(self) -> OsmClient:
        if self._osm_client is None:
            self._osm_client = get_default_osm_client()
        return self._osm_client

    def clear(self, session: Session) -> None:
        logger.warning("Clearing all POS data")
        deleted = self.repository.clear(session)
        logger.info("Deleted %d POS records", deleted)

    def get_all(self, session: Session) -> List[Pos]:
        logger.debug("Retrieving all POS")
        return self.repository.list_pos(session)

    def get_by_id(self, session: Session, pos_id: int) -> Pos:
        logger.debug("Retrieving POS with ID: %s", pos_id)
        return self.repository.get_pos(session, pos_id)

    def upsert(self, session: Session, pos: Pos) -> Pos:
        """Create ``pos`` when it has no id, otherwise update the stored record."""
        if pos.id is None:
            logger.info("Creating new POS: %s", pos.name)
        else:
            logger.info("Updating POS with ID: %s", pos.id)
            # Raises PosNotFoundError before any write is attempted.
            self.repository.get_pos(session, pos.id)
        try:
            saved = self.repository.upsert_pos(session, pos)
        except DuplicatePosNameError as exc:
            logger.error("Error upserting POS '%s': %s", pos.name, exc)
            raise
        logger.info("Successfully upserted POS with ID: %s", saved.id)
        return saved

    def import_from_osm_node(self, session: Session, node_id: int) -> Pos:
        """Fetch, parse, map and persist the OSM node ``node_id``.

        Raises OsmNodeNotFoundError, OsmNodeMissingFieldsError or
        DuplicatePosNameError; nothing is persisted on failure.
        """
        logger.info("Importing POS from OpenStreetMap node %s...", node_id)

        try:
            xml_text = self.osm_client.fetch_node_xml(node_id)
            node = parse_osm_node_xml(xml_text, node_id)
        except OsmNodeNotFoundError as exc:
            logger.error(
                "Import of OSM node %s failed: node not found (cause=%s)",
                node_id,
                exc.cause.value,
            )
            raise

        try:
            candidate = convert_osm_node_to_pos(node, self.campus_resolver)
        except OsmNodeMissingFieldsError:
            logger.error("Import of OSM node %s failed: missing required fields", node_id)
            raise

        try:
            saved = self.upsert(session, candidate)
        except DuplicatePosNameError:
            logger.error(
                "Import of OSM node %s failed: duplicate POS name '%s'", node_id, candidate.name
            )
            raise

        logger.info("Successfully imported POS '%s' from OSM node %s", saved.name, node_id)
        return saved
