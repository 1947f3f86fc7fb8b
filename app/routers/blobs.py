from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationError
from app.schemas.content import UploadResponse
from app.services.blob_service import BlobStore, generate_key, images_store, files_store
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["blobs"])

def _store_upload(request: Request, upload: Optional[UploadFile], store: BlobStore,
                  prefix: str, route_name: str, db: Session) -> dict:
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded")

    # lecture bornée : au-delà de la limite, on ne charge pas le reste du fichier
    data = upload.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError("File too large", details={"max_bytes": settings.MAX_UPLOAD_BYTES})

    key = generate_key(prefix, upload.filename)
    store.put(db, key, data, upload.content_type)
    logger.info(f"Stored {store.bucket}/{key} ({len(data)} bytes)")

    return {"url": str(request.url_for(route_name, key=key))}

def _serve(store: BlobStore, key: str, db: Session) -> Response:
    blob = store.get(db, key)
    if not blob:
        raise NotFoundError("File not found")
    return Response(content=blob.data, media_type=blob.content_type)

@router.post("/images", response_model=UploadResponse)
def upload_image(request: Request, image: Optional[UploadFile] = File(None), db: Session = Depends(get_db)):
    """Uploader une image (champ multipart "image")"""
    return _store_upload(request, image, images_store, "img", "get_image", db)

@router.get("/images/{key}", name="get_image")
def get_image(key: str, db: Session = Depends(get_db)):
    return _serve(images_store, key, db)

@router.post("/files", response_model=UploadResponse)
def upload_file(request: Request, file: Optional[UploadFile] = File(None), db: Session = Depends(get_db)):
    """Uploader un fichier (champ multipart "file")"""
    return _store_upload(request, file, files_store, "file", "get_file", db)

@router.get("/files/{key}", name="get_file")
def get_file(key: str, db: Session = Depends(get_db)):
    return _serve(files_store, key, db)
