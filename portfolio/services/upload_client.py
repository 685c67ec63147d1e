"""
HTTP client for the upload endpoint, used by the admin console.
"""
import logging
from typing import Optional

import httpx

from portfolio.exceptions import UpstreamServiceError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/api/upload"


class UploadClient:
    """
    Sends one file to POST /api/upload and returns the watermarked URL.

    Pass an ASGI app to call the endpoint in-process, or a base URL to call a
    deployed instance.
    """

    def __init__(self, base_url: str = "http://portfolio", app=None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url
        self.app = app
        self._client = client

    def _make_client(self) -> httpx.AsyncClient:
        if self.app is not None:
            return httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app), base_url=self.base_url)
        return httpx.AsyncClient(base_url=self.base_url)

    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        """
        Upload a file and return the URL reported by the endpoint.

        Raises:
            ValidationError: The endpoint rejected the file (HTTP 400)
            UpstreamServiceError: Any other failure
        """
        files = {"file": (filename, content, content_type)}
        client = self._client or self._make_client()
        try:
            logger.info(f"Uploading {filename} ({len(content):,} bytes) to {self.base_url}{UPLOAD_PATH}")
            response = await client.post(UPLOAD_PATH, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Upload request failed: {str(e)}", exc_info=True)
            raise UpstreamServiceError("Upload failed") from e
        finally:
            if self._client is None:
                await client.aclose()

        if response.is_success:
            return response.json()["url"]

        try:
            message = response.json().get("error") or "Upload failed"
        except ValueError:
            message = "Upload failed"

        logger.warning(f"Upload rejected with {response.status_code}: {message}")
        if response.status_code == 400:
            raise ValidationError(message)
        raise UpstreamServiceError(message)
