from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.frontend.render import render_page
from app.schemas.content import ContentResponse
from app.services import content_service

router = APIRouter(tags=["board"])

@router.get("/", response_class=HTMLResponse)
def board_page(db: Session = Depends(get_db)):
    """Page HTML du board, rendue côté serveur"""
    contents = [
        jsonable_encoder(ContentResponse.model_validate(block))
        for block in content_service.list_contents(db)
    ]
    return HTMLResponse(render_page(contents))
