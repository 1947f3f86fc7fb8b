"""
Client HTTP de l'API /contents et /images, utilisé par le BoardController
"""

import logging
from typing import BinaryIO, List, Optional, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ContentApiClient:

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.timeout = timeout

    def _request(self, method: str, path: str, fallback_message: str, **kwargs):
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(str(e)) from e

        if not response.ok:
            # le serveur renvoie {"error": ..., "details": ...}
            try:
                data = response.json()
            except ValueError:
                data = {}
            message = fallback_message
            if isinstance(data, dict):
                details = data.get("details")
                message = (details if isinstance(details, str) and details else None) or data.get("error") or fallback_message
            raise ApiError(message, response.status_code)
        return response.json()

    def list_contents(self) -> List[dict]:
        return self._request("GET", "/contents", "Failed to load contents")

    def create_content(self, data: dict) -> dict:
        return self._request("POST", "/contents", "Failed to create content", json=data)

    def update_content(self, content_id: int, data: dict) -> dict:
        return self._request("PUT", f"/contents/{content_id}", "Failed to update content", json=data)

    def delete_content(self, content_id: int) -> dict:
        return self._request("DELETE", f"/contents/{content_id}", "Failed to delete content")

    def upload_image(self, filename: str, data: Union[bytes, BinaryIO], content_type: str = "application/octet-stream") -> str:
        try:
            result = self._request("POST", "/images", "Image upload failed",
                                 files={"image": (filename, data, content_type)})
        except ApiError as e:
            raise ApiError("Image upload failed", e.status_code) from e
        return result["url"]
