"""
POS repository backed by SQLAlchemy/SQLite.
"""
import logging
from datetime import datetime
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.exceptions import DuplicatePosNameError, PosNotFoundError
from domain.models import CampusType, Pos, PosType
from repositories.models import PosORM

logger = logging.getLogger(__name__)


def _is_duplicate_name(exc: IntegrityError) -> bool:
    """True when the unique index on pos.name rejected the write."""
    msg = str(exc.orig).lower()
    return ("unique" in msg or "duplicate" in msg) and "name" in msg


def _pos_from_orm(orm: PosORM) -> Pos:
    return Pos(
        id=orm.id,
        name=orm.name,
        description=orm.description,
        type=PosType(orm.type),
        campus=CampusType(orm.campus),
        street=orm.street,
        house_number=orm.house_number,
        postal_code=orm.postal_code,
        city=orm.city,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def _update_orm_from_pos(orm: PosORM, pos: Pos) -> None:
    orm.name = pos.name
    orm.description = pos.description
    orm.type = pos.type.value
    orm.campus = pos.campus.value
    orm.street = pos.street
    orm.house_number = pos.house_number
    orm.postal_code = pos.postal_code
    orm.city = pos.city


class PosRepository:
    """CRUD operations for points of sale."""

    def list_pos(self, session: Session) -> List[Pos]:
        rows = session.query(PosORM).order_by(PosORM.id).all()
        return [_pos_from_orm(p) for p in rows]

    def get_pos(self, session: Session, pos_id: int) -> Pos:
        orm = session.get(PosORM, pos_id)
        if not orm:
            raise PosNotFoundError(pos_id)
        return _pos_from_orm(orm)

    def upsert_pos(self, session: Session, pos: Pos) -> Pos:
        """Insert a POS without id, otherwise update the existing row.

        Raises DuplicatePosNameError when the unique name index rejects the
        write and PosNotFoundError when the id to update is unknown.
        """
        now = datetime.utcnow()
        if pos.id is None:
            orm = PosORM(created_at=now)
            session.add(orm)
        else:
            orm = session.get(PosORM, pos.id)
            if not orm:
                raise PosNotFoundError(pos.id)
        _update_orm_from_pos(orm, pos)
        orm.updated_at = now
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            if not _is_duplicate_name(exc):
                raise
            logger.debug("Unique constraint rejected POS '%s': %s", pos.name, exc.orig)
            raise DuplicatePosNameError(pos.name) from exc
        session.refresh(orm)
        return _pos_from_orm(orm)

    def clear(self, session: Session) -> int:
        deleted = session.query(PosORM).delete()
        session.commit()
        return deleted
