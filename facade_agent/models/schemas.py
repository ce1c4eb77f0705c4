"""Pydantic schemas for data validation."""

from typing import Dict, FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, Field

from .enums import ArtifactRole, ModernizationOption, ResponseModality


# === REQUEST ===

class ImageInput(BaseModel):
    """Uploaded photo handed to the image model."""
    data: bytes
    mime_type: str

    class Config:
        frozen = True


class ModernizationChoices(BaseModel):
    """Options the requester selected, with their raw color/material tags."""
    options: FrozenSet[str] = Field(default_factory=frozenset)
    facade_color: Optional[str] = None
    railing_material: Optional[str] = None

    class Config:
        frozen = True

    def selects(self, option: ModernizationOption) -> bool:
        return option.value in self.options


class GenerationRequest(BaseModel):
    """One incoming generation call."""
    primary: ImageInput
    secondary: Optional[ImageInput] = None
    choices: ModernizationChoices = Field(default_factory=ModernizationChoices)

    class Config:
        frozen = True

    @property
    def has_secondary(self) -> bool:
        return self.secondary is not None


class ModelInvocation(BaseModel):
    """A single call to the image model."""
    role: ArtifactRole
    image: ImageInput
    prompt: str
    response_modalities: List[ResponseModality] = Field(
        default_factory=lambda: [ResponseModality.IMAGE, ResponseModality.TEXT]
    )


class Requester(BaseModel):
    """Contact details submitted with the form."""
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    housing_company: Optional[str] = None
    phone_number: Optional[str] = None


# === MODEL RESPONSE (generateContent wire format) ===

class InlineData(BaseModel):
    """Base64 payload of an inline image part."""
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    data: Optional[str] = None

    class Config:
        populate_by_name = True


class Part(BaseModel):
    """One content fragment: inline image and/or text."""
    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")

    class Config:
        populate_by_name = True


class Content(BaseModel):
    parts: Optional[List[Part]] = None


class Candidate(BaseModel):
    """One proposed answer from the model."""
    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")

    class Config:
        populate_by_name = True


class PromptFeedback(BaseModel):
    block_reason: Optional[str] = Field(default=None, alias="blockReason")

    class Config:
        populate_by_name = True


class ModelResponse(BaseModel):
    """Reply of a generateContent call."""
    candidates: Optional[List[Candidate]] = None
    prompt_feedback: Optional[PromptFeedback] = Field(default=None, alias="promptFeedback")

    class Config:
        populate_by_name = True


# === RESULTS ===

class ImagePayload(BaseModel):
    """Decoded image returned by the model."""
    data: bytes
    mime_type: str = "image/png"


class GenerationOutcome(BaseModel):
    """Images produced for one request, keyed by role."""
    glazed_image: ImagePayload
    modernized_image: ImagePayload
    cozy_balcony_image: Optional[ImagePayload] = None

    def artifacts(self) -> List[Tuple[ArtifactRole, ImagePayload]]:
        """Produced images in role order, skipping artifacts never requested."""
        items = [
            (ArtifactRole.GLAZED, self.glazed_image),
            (ArtifactRole.MODERNIZED, self.modernized_image),
        ]
        if self.cozy_balcony_image is not None:
            items.append((ArtifactRole.COZY, self.cozy_balcony_image))
        return items

    def as_mapping(self) -> Dict[str, bytes]:
        return {role.field_name: payload.data for role, payload in self.artifacts()}


class StoredArtifact(BaseModel):
    """An uploaded image with its time-limited link."""
    role: ArtifactRole
    filename: str
    url: str


class GenerateImagesResponse(BaseModel):
    """Body returned to the form."""
    urls: List[str]
