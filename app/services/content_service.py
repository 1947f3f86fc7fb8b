"""Content service - requêtes sur la table content_blocks"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StorageError
from app.models.content_block import ContentBlock

logger = logging.getLogger(__name__)


def _storage_error(db: Session, e: SQLAlchemyError) -> StorageError:
    db.rollback()
    logger.error(f"Database error: {e}")
    return StorageError(str(e))


# L'ordre d'insertion (id croissant) fait partie du contrat de la liste
def list_contents(db: Session) -> List[ContentBlock]:
    try:
        return db.query(ContentBlock).order_by(ContentBlock.id).all()
    except SQLAlchemyError as e:
        raise _storage_error(db, e)


def get_content(db: Session, content_id: int) -> Optional[ContentBlock]:
    try:
        return db.query(ContentBlock).filter(ContentBlock.id == content_id).first()
    except SQLAlchemyError as e:
        raise _storage_error(db, e)


def create_content(db: Session, type: str, title: str, content: str) -> ContentBlock:
    now = datetime.utcnow()
    block = ContentBlock(type=type, title=title, content=content, created_at=now, updated_at=now)
    try:
        db.add(block)
        db.commit()
        db.refresh(block)
    except SQLAlchemyError as e:
        raise _storage_error(db, e)
    return block


def update_content(db: Session, content_id: int, type: str, title: str, content: str) -> ContentBlock:
    # un seul UPDATE : 0 ligne touchée = contenu inexistant
    try:
        rowcount = db.query(ContentBlock).filter(ContentBlock.id == content_id).update(
            {
                ContentBlock.type: type,
                ContentBlock.title: title,
                ContentBlock.content: content,
                ContentBlock.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_error(db, e)

    if rowcount == 0:
        raise NotFoundError("Content not found")

    block = get_content(db, content_id)
    return block


def delete_content(db: Session, content_id: int) -> None:
    try:
        rowcount = db.query(ContentBlock).filter(ContentBlock.id == content_id).delete(
            synchronize_session=False
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_error(db, e)

    if rowcount == 0:
        raise NotFoundError("Content not found")
