from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import settings

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Ajoute les en-têtes CORS à toutes les réponses et répond aux preflight OPTIONS"""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            headers = dict(CORS_HEADERS)
            headers["Access-Control-Max-Age"] = str(settings.CORS_MAX_AGE)
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
