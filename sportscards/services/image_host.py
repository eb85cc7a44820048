"""Upload card images to ImgBB.

ImgBB accepts a multipart `image` field on POST {api_url}?key={api_key}
and answers with {"success": true, "data": {"url": ...}} or
{"success": false, "error": {"message": ...}}.
"""

import json
import logging
from typing import Any

import httpx

from sportscards.config import settings
from sportscards.models.failure import ImageUploadError

logger = logging.getLogger(__name__)


class ImgbbImageHost:
    """ImageHost implementation for the ImgBB upload API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.imgbb.com/1/upload",
        *,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "ImgbbImageHost":
        return cls(
            api_key=settings.imgbb_api_key,
            api_url=settings.imgbb_api_url,
            timeout=settings.image_upload_timeout,
        )

    async def upload(self, image: bytes, filename: str) -> str:
        """Upload image bytes to ImgBB.

        Args:
            image: Encoded image bytes
            filename: Name sent with the multipart field

        Returns:
            Public URL of the hosted image

        Raises:
            ImageUploadError: If not configured, or on network, HTTP,
                response-format or service-reported errors
        """
        if not self.api_key:
            raise ImageUploadError("image hosting is not configured", detail="missing API key")

        logger.info("Uploading %s (%d bytes) to image host", filename, len(image))

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                files = {"image": (filename, image, "application/octet-stream")}
                response = await client.post(
                    self.api_url, params={"key": self.api_key}, files=files
                )
        except httpx.RequestError as exc:
            logger.error("Image upload network error: %s", exc)
            raise ImageUploadError(f"network error ({exc})") from exc

        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            if not response.is_success:
                raise ImageUploadError(f"HTTP error! status: {response.status_code}") from exc
            raise ImageUploadError("invalid response from image host", detail=response.text) from exc
        payload: dict[str, Any] = body if isinstance(body, dict) else {}

        if not response.is_success or not payload.get("success"):
            error = payload.get("error")
            service_message = error.get("message") if isinstance(error, dict) else None
            message = service_message or f"HTTP error! status: {response.status_code}"
            logger.error("Image upload rejected: %s", message)
            raise ImageUploadError(message, detail=response.text)

        url = (payload.get("data") or {}).get("url")
        if not url:
            raise ImageUploadError("Upload failed", detail="response has no image URL")

        logger.info("Image uploaded: %s", url)
        return str(url)
