"""Enumerations for the facade agent."""

from enum import Enum
from typing import Optional


class ModernizationOption(str, Enum):
    """Facade changes the requester can opt into."""
    FACADE = "facade"
    RAILINGS = "railings"


class FacadeColor(str, Enum):
    """Known facade colors."""
    LIGHT_GRAY = "light-gray"
    WHITE = "white"
    BEIGE = "beige"
    BRICK_RED = "brick-red"
    DARK_GRAY = "dark-gray"

    @classmethod
    def resolve(cls, tag: Optional[str]) -> Optional["FacadeColor"]:
        """Map a request tag (or legacy Finnish tag) to a color, None if unknown."""
        return _resolve(cls, tag, _LEGACY_COLOR_TAGS)


class RailingMaterial(str, Enum):
    """Known railing materials."""
    GLASS_METAL = "glass-metal"
    WOOD_SLATS = "wood-slats"
    DARK_METAL = "dark-metal"

    @classmethod
    def resolve(cls, tag: Optional[str]) -> Optional["RailingMaterial"]:
        """Map a request tag (or legacy Finnish tag) to a material, None if unknown."""
        return _resolve(cls, tag, _LEGACY_MATERIAL_TAGS)


class ArtifactRole(str, Enum):
    """Role of one generated image within a request."""
    GLAZED = "glazed"
    MODERNIZED = "modernized"
    COZY = "cozy"

    @property
    def field_name(self) -> str:
        return _FIELD_NAMES[self]

    @property
    def display_title(self) -> str:
        return _TITLES[self]


class ResponseModality(str, Enum):
    """Output modalities requested from the image model."""
    IMAGE = "IMAGE"
    TEXT = "TEXT"


class FinishCategory(str, Enum):
    """Classification of a non-STOP finish reason."""
    LENGTH_LIMITED = "length_limited"
    SAFETY = "safety"
    RECITATION = "recitation"
    INTERRUPTED = "interrupted"

    @classmethod
    def from_reason(cls, finish_reason: str) -> "FinishCategory":
        return _FINISH_REASONS.get(finish_reason, cls.INTERRUPTED)

    def describe(self, finish_reason: str) -> str:
        if self is FinishCategory.LENGTH_LIMITED:
            return "The response was too long."
        if self is FinishCategory.SAFETY:
            return "The response was blocked for safety reasons."
        if self is FinishCategory.RECITATION:
            return "The response contained too much cited material."
        return f"Processing was interrupted ({finish_reason})."


STOP_FINISH_REASON = "STOP"

_FINISH_REASONS = {
    "MAX_TOKENS": FinishCategory.LENGTH_LIMITED,
    "SAFETY": FinishCategory.SAFETY,
    "RECITATION": FinishCategory.RECITATION,
}

_FIELD_NAMES = {
    ArtifactRole.GLAZED: "glazedImage",
    ArtifactRole.MODERNIZED: "modernizedImage",
    ArtifactRole.COZY: "cozyBalconyImage",
}

_TITLES = {
    ArtifactRole.GLAZED: "Proposal 1: Facade with New Glazings",
    ArtifactRole.MODERNIZED: "Proposal 2: Modernized Facade",
    ArtifactRole.COZY: "Proposal 3: Cozy Balcony Atmosphere",
}

# Tags sent by older Finnish-language builds of the form
_LEGACY_COLOR_TAGS = {
    "vaaleanharmaa": FacadeColor.LIGHT_GRAY,
    "valkoinen": FacadeColor.WHITE,
    "tiilenpunainen": FacadeColor.BRICK_RED,
    "tummanharmaa": FacadeColor.DARK_GRAY,
}

_LEGACY_MATERIAL_TAGS = {
    "lasi-metalli": RailingMaterial.GLASS_METAL,
    "puusaleet": RailingMaterial.WOOD_SLATS,
    "tumma-metalli": RailingMaterial.DARK_METAL,
}


def _resolve(enum_cls, tag, legacy):
    if not isinstance(tag, str):
        return None
    normalized = tag.strip().lower()
    if normalized in legacy:
        return legacy[normalized]
    try:
        return enum_cls(normalized)
    except ValueError:
        return None
