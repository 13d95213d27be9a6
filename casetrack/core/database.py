# casetrack/core/database.py

from ..extensions import db
from datetime import datetime
from contextlib import contextmanager
from typing import Generator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import APIError


@contextmanager
def session_manager() -> Generator[Session, None, None]:
    """
    Context manager for a unit of work on the request session.
    Commits on success, rolls back and re-raises on failure.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


@contextmanager
def integrity_guard(message: str):
    """Turn a constraint violation (e.g. a lost uniqueness race) into a 400"""
    try:
        yield
    except IntegrityError:
        db.session.rollback()
        raise APIError(message, status_code=400)


def isoformat(value):
    return value.isoformat() if value else None


class BaseModel(db.Model):
    __abstract__ = True

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def save(self):
        with session_manager() as session:
            session.add(self)
        return self

    def delete(self):
        with session_manager() as session:
            session.delete(self)

    @classmethod
    def create(cls, **kwargs):
        instance = cls(**kwargs)
        return instance.save()

    def timestamps(self):
        return {
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
