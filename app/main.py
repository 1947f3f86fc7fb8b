import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.cors import CORS_HEADERS, PermissiveCORSMiddleware
from app.core.database import engine, Base
from app.core.errors import ContentBoardError
from app.routers import health, contents, blobs, board

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Content Board API",
    version="1.0.0"
)

app.add_middleware(PermissiveCORSMiddleware)

# Erreurs -> {"error": ..., "details": ...}
@app.exception_handler(ContentBoardError)
async def content_board_error_handler(request: Request, exc: ContentBoardError):
    body = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_errors(exc)},
    )

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

# ce handler passe hors du middleware CORS : on remet les en-têtes ici
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": str(exc)}, headers=CORS_HEADERS)

def jsonable_errors(exc: RequestValidationError) -> list:
    # garde seulement ce qui est sérialisable en JSON
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(contents.router)
app.include_router(blobs.router)
app.include_router(board.router)
