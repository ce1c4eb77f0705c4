"""Data models and schemas for the facade agent."""

from .schemas import (
    ImageInput,
    ModernizationChoices,
    GenerationRequest,
    ModelInvocation,
    Requester,
    ModelResponse,
    ImagePayload,
    GenerationOutcome,
    StoredArtifact,
    GenerateImagesResponse,
)
from .enums import (
    ModernizationOption,
    FacadeColor,
    RailingMaterial,
    ArtifactRole,
    ResponseModality,
    FinishCategory,
)

__all__ = [
    "ImageInput",
    "ModernizationChoices",
    "GenerationRequest",
    "ModelInvocation",
    "Requester",
    "ModelResponse",
    "ImagePayload",
    "GenerationOutcome",
    "StoredArtifact",
    "GenerateImagesResponse",
    "ModernizationOption",
    "FacadeColor",
    "RailingMaterial",
    "ArtifactRole",
    "ResponseModality",
    "FinishCategory",
]
