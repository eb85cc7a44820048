"""Tests for the ImgBB image host client (mocked HTTP)."""

import httpx
import pytest
import respx

from sportscards.models.failure import FailureKind, ImageUploadError
from sportscards.services.image_host import ImgbbImageHost

UPLOAD_URL = "https://api.imgbb.com/1/upload"


@pytest.fixture
def host() -> ImgbbImageHost:
    return ImgbbImageHost(api_key="test-key", api_url=UPLOAD_URL)


class TestUpload:
    """Tests for upload responses."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_hosted_url(self, host: ImgbbImageHost) -> None:
        """A successful upload returns data.url."""
        route = respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(
                200, json={"success": True, "data": {"url": "https://i.ibb.co/abc/card.jpg"}}
            )
        )

        url = await host.upload(b"jpeg-bytes", "card.jpg")

        assert url == "https://i.ibb.co/abc/card.jpg"
        request = route.calls.last.request
        assert request.url.params["key"] == "test-key"
        assert b'name="image"' in request.content

    @pytest.mark.asyncio
    @respx.mock
    async def test_service_error_message(self, host: ImgbbImageHost) -> None:
        """The host's own error message is surfaced."""
        respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(
                400, json={"success": False, "error": {"message": "Invalid API v1 key."}}
            )
        )

        with pytest.raises(ImageUploadError) as exc_info:
            await host.upload(b"jpeg-bytes", "card.jpg")

        assert exc_info.value.message == "Failed to upload image: Invalid API v1 key."
        assert exc_info.value.kind == FailureKind.IMAGE_UPLOAD_FAILED

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_without_body(self, host: ImgbbImageHost) -> None:
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(ImageUploadError, match="HTTP error! status: 502"):
            await host.upload(b"jpeg-bytes", "card.jpg")

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_url_is_failure(self, host: ImgbbImageHost) -> None:
        respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(200, json={"success": True, "data": {}})
        )

        with pytest.raises(ImageUploadError, match="Upload failed"):
            await host.upload(b"jpeg-bytes", "card.jpg")

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error(self, host: ImgbbImageHost) -> None:
        respx.post(UPLOAD_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(ImageUploadError, match="network error"):
            await host.upload(b"jpeg-bytes", "card.jpg")

    @pytest.mark.asyncio
    async def test_missing_key_fails_without_request(self) -> None:
        """No request is made when hosting is not configured."""
        host = ImgbbImageHost(api_key="")

        with pytest.raises(ImageUploadError, match="not configured"):
            await host.upload(b"jpeg-bytes", "card.jpg")
