import io
import inspect
import pytest
from unittest.mock import MagicMock
from app.core.config import settings
from app.core.errors import ValidationError
from app.routers.blobs import _store_upload, upload_image, upload_file
from app.models.blob import Blob
from app.services.blob_service import images_store, key_from_url

# ========== TEST UPLOAD IMAGE ==========
def test_upload_image_success(client, db):
    """Upload puis téléchargement via l'URL renvoyée"""
    response = client.post(
        "/images",
        files={"image": ("photo.png", b"\x89PNG fake bytes", "image/png")}
    )
    assert response.status_code == 200
    url = response.json()["url"]
    key = key_from_url(url)
    assert key.startswith("img_")
    assert key.endswith(".png")

    blob = db.query(Blob).filter(Blob.key == key).first()
    assert blob.bucket == "images"
    assert blob.size == len(b"\x89PNG fake bytes")

    download = client.get(f"/images/{key}")
    assert download.status_code == 200
    assert download.content == b"\x89PNG fake bytes"
    assert download.headers["content-type"].startswith("image/png")

def test_upload_image_missing_file(client):
    response = client.post("/images", data={"other": "value"})
    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"

def test_upload_image_empty_file(client):
    response = client.post("/images", files={"image": ("empty.png", b"", "image/png")})
    assert response.status_code == 400
    assert response.json()["error"] == "Uploaded file is empty"

def test_upload_image_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)
    response = client.post("/images", files={"image": ("big.png", b"12345", "image/png")})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "File too large"
    assert body["details"] == {"max_bytes": 4}

def test_get_unknown_image(client):
    response = client.get("/images/img_nope.png")
    assert response.status_code == 404
    assert response.json() == {"error": "File not found"}

# ========== TEST UPLOAD FILE ==========
def test_upload_file_success(client):
    response = client.post(
        "/files",
        files={"file": ("notes.txt", b"hello", "text/plain")}
    )
    assert response.status_code == 200
    key = key_from_url(response.json()["url"])
    assert key.startswith("file_")

    # les buckets sont indépendants
    assert client.get(f"/images/{key}").status_code == 404
    assert client.get(f"/files/{key}").content == b"hello"

# ========== TEST CASCADE ==========
def test_delete_image_content_removes_uploaded_blob(client, db):
    """Scénario complet : upload, création, suppression -> blob supprimé"""
    url = client.post(
        "/images",
        files={"image": ("photo.png", b"png", "image/png")}
    ).json()["url"]
    created = client.post("/contents", json={"type": "image", "title": "photo", "content": url}).json()

    response = client.delete(f"/contents/{created['id']}")
    assert response.status_code == 200
    assert db.query(Blob).count() == 0
    assert client.get(f"/images/{key_from_url(url)}").status_code == 404

def test_upload_reads_at_most_limit_plus_one(db, monkeypatch):
    """Le fichier n'est lu que jusqu'à la limite + 1 octet"""
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 8)
    upload = MagicMock()
    upload.filename = "big.png"
    upload.file = MagicMock(wraps=io.BytesIO(b"x" * 100))

    with pytest.raises(ValidationError):
        _store_upload(MagicMock(), upload, images_store, "img", "get_image", db)
    upload.file.read.assert_called_once_with(9)
    assert db.query(Blob).count() == 0

def test_upload_handlers_run_in_threadpool():
    """Handlers synchrones : FastAPI les exécute hors de la boucle d'événements"""
    assert not inspect.iscoroutinefunction(upload_image)
    assert not inspect.iscoroutinefunction(upload_file)
