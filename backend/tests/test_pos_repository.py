"""
Tests for the SQLAlchemy-backed POS repository.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from domain.exceptions import DuplicatePosNameError, PosNotFoundError
from domain.models import CampusType, Pos, PosType
from repositories import PosRepository


def _pos(name="Cafe Botanik", **overrides) -> Pos:
    data = dict(
        name=name,
        description="Imported from OpenStreetMap",
        type=PosType.CAFE,
        campus=CampusType.INF,
        street="Im Neuenheimer Feld",
        house_number="304",
        postal_code=69120,
        city="Heidelberg",
    )
    data.update(overrides)
    return Pos(**data)


class TestPosRepository:
    def setup_method(self):
        self.repo = PosRepository()

    def test_create_assigns_id_and_timestamps(self, session):
        saved = self.repo.upsert_pos(session, _pos())

        assert saved.id is not None
        assert saved.created_at is not None
        assert saved.updated_at is not None
        assert saved.type == PosType.CAFE
        assert saved.campus == CampusType.INF
        assert self.repo.get_pos(session, saved.id) == saved

    def test_duplicate_name_on_create(self, session):
        self.repo.upsert_pos(session, _pos())
        with pytest.raises(DuplicatePosNameError) as excinfo:
            self.repo.upsert_pos(session, _pos(description="other"))
        assert excinfo.value.name == "Cafe Botanik"
        # session stays usable and only one row exists
        assert len(self.repo.list_pos(session)) == 1

    def test_update_existing(self, session):
        saved = self.repo.upsert_pos(session, _pos())
        saved.description = "Now with cake"
        saved.type = PosType.BAKERY

        updated = self.repo.upsert_pos(session, saved)

        assert updated.id == saved.id
        assert updated.description == "Now with cake"
        assert updated.type == PosType.BAKERY
        assert updated.created_at == saved.created_at
        assert updated.updated_at >= saved.created_at

    def test_update_unknown_id(self, session):
        with pytest.raises(PosNotFoundError) as excinfo:
            self.repo.upsert_pos(session, _pos(id=404))
        assert excinfo.value.pos_id == 404

    def test_rename_onto_existing_name(self, session):
        self.repo.upsert_pos(session, _pos("A"))
        b = self.repo.upsert_pos(session, _pos("B"))
        b.name = "A"
        with pytest.raises(DuplicatePosNameError):
            self.repo.upsert_pos(session, b)
        assert self.repo.get_pos(session, b.id).name == "B"

    def test_get_unknown(self, session):
        with pytest.raises(PosNotFoundError):
            self.repo.get_pos(session, 1)

    def test_list_and_clear(self, session):
        self.repo.upsert_pos(session, _pos("A"))
        self.repo.upsert_pos(session, _pos("B"))
        assert [p.name for p in self.repo.list_pos(session)] == ["A", "B"]

        assert self.repo.clear(session) == 2
        assert self.repo.list_pos(session) == []

    def test_not_null_violation_is_not_a_duplicate(self, session):
        with pytest.raises(IntegrityError):
            self.repo.upsert_pos(session, _pos(description=None))
        # session was rolled back and stays usable
        assert self.repo.list_pos(session) == []
