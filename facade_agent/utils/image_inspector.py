"""Inspection of uploaded photos before they reach the image model."""

import io
from typing import Optional
from PIL import Image, UnidentifiedImageError

from .logger import get_logger
from .errors import ImageProcessingError
from ..models.schemas import ImageInput

logger = get_logger(__name__)


class ImageInspector:
    """Checks that an upload decodes and settles its MIME type."""

    # Formats the image model accepts as inline data
    SUPPORTED_FORMATS = {
        'JPEG': 'image/jpeg',
        # Multi-picture JPEG written by many phone cameras
        'MPO': 'image/jpeg',
        'PNG': 'image/png',
        'WEBP': 'image/webp',
        'HEIF': 'image/heif',
        'GIF': 'image/gif',
    }

    def inspect(
        self,
        file_bytes: bytes,
        declared_mime_type: Optional[str] = None,
        field_name: str = "image",
    ) -> ImageInput:
        """
        Build an ImageInput from an upload.

        The MIME type comes from the decoded format; the declared type is
        only reported when it disagrees.

        Args:
            file_bytes: Raw upload
            declared_mime_type: Content type sent by the client
            field_name: Form field, used in error messages

        Returns:
            ImageInput

        Raises:
            ImageProcessingError: If the bytes are not a supported image
        """
        if not file_bytes:
            raise ImageProcessingError(f"{field_name} is empty.")

        try:
            with Image.open(io.BytesIO(file_bytes)) as image:
                image_format = image.format
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ImageProcessingError(f"{field_name} is not a readable image: {e}")

        mime_type = self.SUPPORTED_FORMATS.get(image_format or "")
        if mime_type is None:
            raise ImageProcessingError(
                f"{field_name} format '{image_format}' not supported. "
                f"Supported formats: {', '.join(sorted(self.SUPPORTED_FORMATS))}"
            )

        if declared_mime_type and declared_mime_type != mime_type:
            logger.warning(
                f"Declared type of {field_name} does not match its content",
                extra={"declared": declared_mime_type, "detected": mime_type}
            )

        logger.info(
            f"Accepted {field_name}",
            extra={
                "format": image_format,
                "file_size_kb": len(file_bytes) / 1024,
            }
        )

        return ImageInput(data=file_bytes, mime_type=mime_type)
