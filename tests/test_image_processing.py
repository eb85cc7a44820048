"""Tests for card image validation and compression."""

import io
from collections.abc import Callable

import pytest
from PIL import Image

from sportscards.config import MAX_IMAGE_BYTES
from sportscards.models.failure import FailureKind, ImageRejectedError
from sportscards.services.image_processing import (
    compress_image,
    fit_within,
    prepare_image,
    validate_image_file,
)


class TestValidateImageFile:
    def test_rejects_non_image_type(self) -> None:
        with pytest.raises(ImageRejectedError, match="Please select an image file") as exc_info:
            validate_image_file("application/pdf", 100)

        assert exc_info.value.kind == FailureKind.IMAGE_REJECTED

    def test_rejects_large_file(self) -> None:
        """A 6MB image is rejected before any decoding."""
        with pytest.raises(ImageRejectedError, match="less than 5MB"):
            validate_image_file("image/jpeg", 6 * 1024 * 1024)

    def test_accepts_limit_exactly(self) -> None:
        validate_image_file("image/png", MAX_IMAGE_BYTES)


class TestFitWithin:
    def test_large_image_is_scaled_to_box(self) -> None:
        assert fit_within(1600, 1000) == (800, 500)
        assert fit_within(1000, 2000) == (500, 1000)

    def test_small_image_is_not_enlarged(self) -> None:
        assert fit_within(300, 400) == (300, 400)


class TestCompressImage:
    def test_output_is_jpeg_within_box(self, make_image: Callable[..., bytes]) -> None:
        attachment = compress_image(make_image(1600, 1200), "front.png")

        assert attachment.filename == "front.jpg"
        assert attachment.content_type == "image/jpeg"
        assert (attachment.width, attachment.height) == (800, 600)
        with Image.open(io.BytesIO(attachment.data)) as decoded:
            assert decoded.format == "JPEG"
            assert decoded.size == (800, 600)

    def test_undecodable_bytes_are_rejected(self) -> None:
        with pytest.raises(ImageRejectedError):
            compress_image(b"not really a png", "broken.png")

    def test_decompression_bomb_is_rejected(
        self, make_image: Callable[..., bytes], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Images over Pillow's pixel limit are a rejection, not a crash."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageRejectedError) as exc_info:
            compress_image(make_image(100, 100), "huge.png")

        assert exc_info.value.kind == FailureKind.IMAGE_REJECTED
        assert exc_info.value.message == "Image dimensions are too large"


class TestPrepareImage:
    def test_validates_then_compresses(self, make_image: Callable[..., bytes]) -> None:
        attachment = prepare_image("card.gif", "image/gif", make_image(50, 80, fmt="GIF"))

        assert attachment.filename == "card.jpg"
        assert attachment.size == len(attachment.data)

    def test_oversized_file_rejected(self) -> None:
        with pytest.raises(ImageRejectedError):
            prepare_image("huge.jpg", "image/jpeg", b"\0" * (MAX_IMAGE_BYTES + 1))
