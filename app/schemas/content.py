from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

# Schemas pour les content blocks

class ContentPayload(BaseModel):
    """Corps de POST /contents et PUT /contents/{id}

    Les champs sont optionnels ici : l'absence est vérifiée dans le router
    pour renvoyer {"error": ...} en 400 comme les autres erreurs.
    """
    type: Optional[str] = None  # "text", "code", "poetry", "image", "file"
    title: Optional[str] = None
    content: Optional[str] = None

class ContentResponse(BaseModel):
    id: int
    type: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class MessageResponse(BaseModel):
    message: str

class UploadResponse(BaseModel):
    url: str
