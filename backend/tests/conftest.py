import sys
from pathlib import Path
from xml.sax.saxutils import quoteattr

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

RADA_TAGS = {
    "name": "Rada Coffee & Rösterei",
    "addr:street": "Hauptstraße",
    "addr:housenumber": "12",
    "addr:postcode": "69117",
    "addr:city": "Heidelberg",
    "amenity": "cafe",
    "website": "http://rada.example",
}


@pytest.fixture
def session_factory():
    """Sessions bound to a fresh in-memory SQLite database."""
    from db import Base
    from repositories import models  # noqa: F401  Ensures models are registered

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def session(session_factory):
    with session_factory() as s:
        yield s


@pytest.fixture
def rada_tags():
    return dict(RADA_TAGS)


@pytest.fixture
def make_node_xml():
    """Build an OSM API 0.6 style document for a single node."""

    def _make(tags, node_id=5589879349, lat="49.4122362", lon="8.7077883", declaration=True):
        coords = ""
        if lat is not None:
            coords += f" lat={quoteattr(str(lat))}"
        if lon is not None:
            coords += f" lon={quoteattr(str(lon))}"
        # tags may be a dict or a list of (k, v) pairs to allow duplicate keys
        pairs = tags.items() if isinstance(tags, dict) else tags
        tag_lines = "".join(f"  <tag k={quoteattr(k)} v={quoteattr(v)}/>\n" for k, v in pairs)
        head = '<?xml version="1.0" encoding="UTF-8"?>\n' if declaration else ""
        return (
            f'{head}<osm version="0.6" generator="openstreetmap-cgimap">\n'
            f' <node id="{node_id}" visible="true" version="3"{coords}>\n'
            f"{tag_lines}"
            " </node>\n"
            "</osm>\n"
        )

    return _make
