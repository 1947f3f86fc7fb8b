"""Blob service - stockage clé/valeur des images et fichiers

Deux buckets indépendants : "images" et "files". Un contenu de type image/file
stocke l'URL du blob ; la clé est le dernier segment du chemin de cette URL.
"""

import logging
import os
import secrets
import time
from typing import Optional
from urllib.parse import urlparse, unquote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.models.blob import Blob

logger = logging.getLogger(__name__)

IMAGES_BUCKET = "images"
FILES_BUCKET = "files"


class BlobStore:

    def __init__(self, bucket: str):
        self.bucket = bucket

    def put(self, db: Session, key: str, data: bytes, content_type: Optional[str] = None) -> Blob:
        try:
            blob = self.get(db, key)
            if blob is None:
                blob = Blob(bucket=self.bucket, key=key)
                db.add(blob)
            blob.data = data
            blob.size = len(data)
            blob.content_type = content_type or "application/octet-stream"
            db.commit()
            db.refresh(blob)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error storing {self.bucket}/{key}: {e}")
            raise StorageError(str(e))
        return blob

    def get(self, db: Session, key: str) -> Optional[Blob]:
        return db.query(Blob).filter(Blob.bucket == self.bucket, Blob.key == key).first()

    def delete(self, db: Session, key: str) -> bool:
        try:
            deleted = db.query(Blob).filter(Blob.bucket == self.bucket, Blob.key == key).delete(
                synchronize_session=False
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(str(e))
        return deleted > 0


images_store = BlobStore(IMAGES_BUCKET)
files_store = BlobStore(FILES_BUCKET)


def store_for_type(content_type: str) -> Optional[BlobStore]:
    if content_type == "file":
        return files_store
    if content_type == "image":
        return images_store
    return None


def key_from_url(url: str) -> str:
    """https://host/bucket/img_12345.png -> img_12345.png"""
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        raise ValueError(f"No blob key in URL: {url!r}")
    return unquote(segments[-1])


def generate_key(prefix: str, filename: Optional[str] = None) -> str:
    # horodatage en ms + suffixe aléatoire, on garde l'extension d'origine
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(4)}{ext}"
