"""Aggregation of interpreted images into a named outcome."""

from typing import Optional

from ..models.schemas import GenerationOutcome, ImagePayload


def assemble_outcome(
    glazed: ImagePayload,
    modernized: ImagePayload,
    cozy: Optional[ImagePayload] = None,
) -> GenerationOutcome:
    """
    Combine interpreted images into a GenerationOutcome.

    The cozy balcony image is left unset when no balcony photo was supplied,
    so it is absent from ``GenerationOutcome.as_mapping()``.
    """
    return GenerationOutcome(
        glazed_image=glazed,
        modernized_image=modernized,
        cozy_balcony_image=cozy,
    )
