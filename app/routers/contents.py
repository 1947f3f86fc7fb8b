from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.errors import NotFoundError, StorageError, ValidationError
from app.schemas.content import ContentPayload, ContentResponse, MessageResponse
from app.services import content_service
from app.services.blob_service import key_from_url, store_for_type
from app.services.telegram_service import (
    send_to_telegram, format_content_message, format_delete_message
)
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contents", tags=["contents"])

DELETE_SUCCESS_MESSAGE = "Deleted successfully"

# plus grand id stockable dans une colonne INTEGER (SQLite, PostgreSQL bigint)
MAX_CONTENT_ID = 2**63 - 1

def _check_id(content_id: int):
    """Un id hors de la plage stockable ne peut correspondre à aucun contenu"""
    if not 1 <= content_id <= MAX_CONTENT_ID:
        raise NotFoundError("Content not found")

def _require_fields(payload: ContentPayload):
    """Vérifie que type, title et content sont présents et non vides"""
    if not payload.type or not payload.title or not payload.content:
        raise ValidationError("Missing required fields")

@router.get("", response_model=List[ContentResponse])
def list_contents(db: Session = Depends(get_db)):
    """Récupérer tous les contenus (ordre d'insertion)"""
    return content_service.list_contents(db)

@router.post("", response_model=ContentResponse)
def create_content(payload: ContentPayload, db: Session = Depends(get_db)):
    """Créer un contenu puis notifier Telegram"""
    _require_fields(payload)
    block = content_service.create_content(db, payload.type, payload.title, payload.content)

    # après le commit : l'échec de la notification ne change pas la réponse
    send_to_telegram(format_content_message(block.type, block.title, block.content))
    return block

@router.put("/{content_id}", response_model=ContentResponse)
def update_content(content_id: int, payload: ContentPayload, db: Session = Depends(get_db)):
    """Remplacer type, title et content d'un contenu"""
    _check_id(content_id)
    _require_fields(payload)
    block = content_service.update_content(db, content_id, payload.type, payload.title, payload.content)

    send_to_telegram(format_content_message(block.type, block.title, block.content, is_edit=True))
    return block

@router.delete("/{content_id}", response_model=MessageResponse)
def delete_content(content_id: int, db: Session = Depends(get_db)):
    """Supprimer un contenu, puis son blob éventuel (nettoyage best-effort)"""
    _check_id(content_id)
    block = content_service.get_content(db, content_id)
    if not block:
        raise NotFoundError("Content not found")
    content_type, title, content = block.type, block.title, block.content

    # la ligne d'abord : au pire il reste un blob orphelin, jamais une URL morte
    content_service.delete_content(db, content_id)

    store = store_for_type(content_type)
    if store is not None:
        try:
            key = key_from_url(content)
            store.delete(db, key)
            logger.info(f"Deleted {content_type} blob: {key}")
        except (ValueError, StorageError) as e:
            logger.error(f"Error deleting {content_type} blob for content {content_id}: {e}")

    send_to_telegram(format_delete_message(content_type, title))
    return {"message": DELETE_SUCCESS_MESSAGE}
