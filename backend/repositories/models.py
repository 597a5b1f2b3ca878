"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String

from db import Base


class PosORM(Base):
    __tablename__ = "pos"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    # The unique index is the only place duplicate names are detected.
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)
    campus = Column(String, nullable=False)
    street = Column(String, nullable=False)
    house_number = Column(String, nullable=False)
    postal_code = Column(Integer, nullable=False)
    city = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
