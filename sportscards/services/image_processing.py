"""
Card image intake.

Validates a user-selected file and shrinks it before upload:
- Must have an image/* content type
- Must be at most MAX_IMAGE_BYTES
- Resized to fit IMAGE_MAX_WIDTH x IMAGE_MAX_HEIGHT (aspect kept, never
  enlarged) and re-encoded as JPEG
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from sportscards.config import (
    IMAGE_JPEG_QUALITY,
    IMAGE_MAX_HEIGHT,
    IMAGE_MAX_WIDTH,
    MAX_IMAGE_BYTES,
)
from sportscards.models.failure import ImageRejectedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImageAttachment:
    """A processed image waiting to be uploaded."""

    filename: str
    content_type: str
    data: bytes
    width: int
    height: int

    @property
    def size(self) -> int:
        return len(self.data)


def validate_image_file(content_type: str, size: int) -> None:
    """
    Check type and size before any decoding.

    Raises:
        ImageRejectedError: If not an image or larger than MAX_IMAGE_BYTES
    """
    if not (content_type or "").startswith("image/"):
        raise ImageRejectedError("Please select an image file", detail=content_type or None)
    if size > MAX_IMAGE_BYTES:
        raise ImageRejectedError(
            "Image size must be less than 5MB",
            detail=f"{size} bytes",
        )


def fit_within(
    width: int,
    height: int,
    max_width: int = IMAGE_MAX_WIDTH,
    max_height: int = IMAGE_MAX_HEIGHT,
) -> tuple[int, int]:
    """Largest size no bigger than the box with the same aspect ratio."""
    scale = min(max_width / width, max_height / height, 1.0)
    return max(1, round(width * scale)), max(1, round(height * scale))


def compress_image(data: bytes, filename: str = "card.jpg") -> ImageAttachment:
    """
    Resize and re-encode an image as JPEG.

    Raises:
        ImageRejectedError: If the bytes cannot be decoded as an image, or
            the pixel count exceeds Pillow's decompression bomb limit
    """
    try:
        with Image.open(io.BytesIO(data)) as source:
            image = ImageOps.exif_transpose(source)
            image = image.convert("RGB")
    except Image.DecompressionBombError as e:
        raise ImageRejectedError("Image dimensions are too large", detail=str(e)) from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageRejectedError("Please select an image file", detail=str(e)) from e

    target = fit_within(image.width, image.height)
    if target != image.size:
        image = image.resize(target, Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=IMAGE_JPEG_QUALITY, optimize=True)

    jpeg_name = f"{Path(filename).stem or 'card'}.jpg"
    logger.debug(
        "Compressed %s: %d -> %d bytes, %dx%d",
        filename,
        len(data),
        buffer.tell(),
        image.width,
        image.height,
    )
    return ImageAttachment(
        filename=jpeg_name,
        content_type="image/jpeg",
        data=buffer.getvalue(),
        width=image.width,
        height=image.height,
    )


def prepare_image(filename: str, content_type: str, data: bytes) -> ImageAttachment:
    """Validate then compress a selected file."""
    validate_image_file(content_type, len(data))
    return compress_image(data, filename)
