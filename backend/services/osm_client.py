"""Client for the OpenStreetMap API 0.6 node endpoint.

Fetches the raw XML for a single node. Every way this can go wrong (unknown
node, bad status, transport error, HTML error page) is reported as
OsmNodeNotFoundError; the ``cause`` on the error is there for the logs.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from domain.exceptions import OsmFailureCause, OsmNodeNotFoundError
from settings import FALLBACK_USER_AGENT, settings

logger = logging.getLogger(__name__)

OSM_ACCEPT_HEADER = "application/xml, text/xml, */*"
_XML_PREFIXES = ("<?xml", "<osm")
_LOG_BODY_CHARS = 500


def _snippet(body: str) -> str:
    return body[:_LOG_BODY_CHARS]


def _looks_like_xml(body: str) -> bool:
    return body.strip().startswith(_XML_PREFIXES)


class OsmClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.OSM_API_BASE_URL).rstrip("/")
        ua = user_agent or settings.OSM_USER_AGENT
        if ua is None:
            logger.warning(
                "OSM_USER_AGENT not set in environment; using fallback UA. "
                "This may violate the OSM API usage policy."
            )
            ua = FALLBACK_USER_AGENT
        self.headers = {
            "User-Agent": ua,
            "Accept": OSM_ACCEPT_HEADER,
        }
        self.timeout = timeout if timeout is not None else settings.OSM_REQUEST_TIMEOUT
        self._session = session or requests.Session()

    def node_url(self, node_id: int) -> str:
        return f"{self.base_url}/{node_id}"

    def fetch_node_xml(self, node_id: int) -> str:
        """Return the raw XML document describing ``node_id``.

        Raises OsmNodeNotFoundError for non-2xx responses, empty or non-XML
        bodies and any exception raised while talking to the API. No retries.
        """
        url = self.node_url(node_id)
        logger.info("Fetching OSM node %s from %s", node_id, url)

        try:
            resp = self._session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Transport error fetching OSM node %s: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id, OsmFailureCause.TRANSPORT) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching OSM node %s: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id, OsmFailureCause.UNEXPECTED) from exc

        if not 200 <= resp.status_code < 300:
            logger.error(
                "OSM API returned status %s for node %s, body: %s",
                resp.status_code,
                node_id,
                _snippet(resp.text or ""),
            )
            raise OsmNodeNotFoundError(node_id, OsmFailureCause.HTTP_STATUS)

        body = resp.text
        if not body or not body.strip():
            logger.error("OSM API returned an empty body for node %s", node_id)
            raise OsmNodeNotFoundError(node_id, OsmFailureCause.EMPTY_BODY)

        if not _looks_like_xml(body):
            logger.error(
                "Invalid OSM response for node %s: not XML. Status: %s, Content-Type: %s, body: %s",
                node_id,
                resp.status_code,
                resp.headers.get("Content-Type"),
                _snippet(body),
            )
            raise OsmNodeNotFoundError(node_id, OsmFailureCause.NOT_XML)

        return body


_default_osm_client: Optional[OsmClient] = None


def get_default_osm_client() -> OsmClient:
    global _default_osm_client
    if _default_osm_client is None:
        _default_osm_client = OsmClient()
    return _default_osm_client
