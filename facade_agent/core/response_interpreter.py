"""Interpretation of image model responses."""

import base64
import binascii
import re
from typing import Optional, Union

from ..models.enums import STOP_FINISH_REASON, FinishCategory
from ..models.schemas import ImagePayload, ModelResponse
from ..utils.errors import (
    AbnormalFinish,
    BlockedBySafety,
    EmptyContent,
    ModelContentError,
    NoCandidate,
    NoImageNoExplanation,
    TextualRefusal,
)

InterpretedResult = Union[ImagePayload, ModelContentError]

_CODE_FENCE = re.compile(r"```")


def classify_response(response: ModelResponse) -> InterpretedResult:
    """
    Classify a model response as an image payload or a typed failure.

    Checks run in a fixed order: prompt block, missing candidate, abnormal
    finish, empty content, then part extraction. Only the first candidate
    is considered.

    Args:
        response: Parsed generateContent reply

    Returns:
        ImagePayload on success, otherwise the ModelContentError describing
        why no image is available
    """
    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        return BlockedBySafety(feedback.block_reason)

    if not response.candidates:
        return NoCandidate()
    candidate = response.candidates[0]

    finish_reason = candidate.finish_reason
    if finish_reason and finish_reason != STOP_FINISH_REASON:
        return AbnormalFinish(FinishCategory.from_reason(finish_reason), finish_reason)

    parts = candidate.content.parts if candidate.content is not None else None
    if not parts:
        return EmptyContent()

    # An image wins over any accompanying text
    for part in parts:
        if part.inline_data is not None and part.inline_data.data:
            data = _decode(part.inline_data.data)
            if data is None:
                return NoImageNoExplanation()
            return ImagePayload(
                data=data,
                mime_type=part.inline_data.mime_type or "image/png",
            )

    for part in parts:
        if part.text:
            explanation = _CODE_FENCE.sub("", part.text).strip()
            if explanation:
                return TextualRefusal(explanation)
            break

    return NoImageNoExplanation()


def interpret_response(response: ModelResponse) -> ImagePayload:
    """Return the image carried by a response or raise its classified failure."""
    result = classify_response(response)
    if isinstance(result, ModelContentError):
        raise result
    return result


def _decode(data: str) -> Optional[bytes]:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None
