"""Helpers for looking up and creating subnoddits."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from noddit.models.subnoddit import Subnoddit
from noddit.schemas.subnoddit import SubnodditCreate
from noddit.services.exceptions import ConflictError

logger = logging.getLogger(__name__)


def get_subnoddit(db: Session, subnoddit_id: int) -> Subnoddit | None:
    """Return a subnoddit by primary key."""
    return db.get(Subnoddit, subnoddit_id)


def list_subnoddits(db: Session, skip: int = 0, limit: int = 100) -> Sequence[Subnoddit]:
    """Return subnoddits ordered by name."""
    return db.query(Subnoddit).order_by(Subnoddit.name).offset(skip).limit(limit).all()


def create_subnoddit(db: Session, data: SubnodditCreate) -> Subnoddit:
    """Persist a new subnoddit; names are unique."""
    existing = db.query(Subnoddit).filter(Subnoddit.name == data.name).first()
    if existing:
        raise ConflictError("Subnoddit already exists")
    subnoddit = Subnoddit(name=data.name, description=data.description)
    db.add(subnoddit)
    db.commit()
    db.refresh(subnoddit)
    logger.info("Created subnoddit %s (%s)", subnoddit.id, subnoddit.name)
    return subnoddit
