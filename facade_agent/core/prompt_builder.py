"""Prompt construction for the glazing, modernization and cozy-balcony edits."""

from typing import Optional

from pydantic import BaseModel

from ..models.enums import FacadeColor, ModernizationOption, RailingMaterial
from ..models.schemas import ModernizationChoices


GLAZING_PROMPT = (
    "Your task is to COMPLETELY and ONLY add photorealistic, modern, frameless "
    "glazing to every balcony in the image. CRITICAL RULE: Do not change the "
    "building's original architecture, structure, shape or any details in any "
    "way. The number, position and shape of the balconies must remain 100% "
    "unchanged. Do NOT add, remove or move a single balcony. Do NOT edit any "
    "other part of the image. Railings, walls, windows and surroundings must "
    "stay EXACTLY as in the original. The only permitted change is adding "
    "balcony glazing to the existing balconies. Return only the edited image."
)

CONSISTENCY_DIRECTIVE = (
    "CRITICAL INSTRUCTION: It is absolutely essential that every change listed "
    "below is applied consistently and comprehensively across the ENTIRE visible "
    "facade. No part of the building may be left in its original state. If you "
    "change an element (e.g. a balcony railing or a window frame), change it in "
    "ALL corresponding places."
)

BASE_GLAZING_INSTRUCTION = (
    "Modernize this building facade. Add photorealistic, modern, frameless "
    "glazing to every balcony."
)

STRUCTURE_PRESERVATION_CLAUSE = (
    "The basic structure of the building, including the position and number of "
    "all windows and balconies, must remain completely unchanged. Do not remove "
    "existing windows or balconies, and do not add new ones."
)

MODERNIZATION_CLOSING = (
    "Create a coherent, modern look. Make sure the result is photorealistic. "
    "Return only the edited image without any text."
)

COLOR_PHRASES = {
    FacadeColor.LIGHT_GRAY: "light gray",
    FacadeColor.WHITE: "pure white",
    FacadeColor.BEIGE: "warm beige",
    FacadeColor.BRICK_RED: "a modern brick red",
    FacadeColor.DARK_GRAY: "dark gray",
}
DEFAULT_COLOR_PHRASE = "a modern tone"

MATERIAL_PHRASES = {
    RailingMaterial.GLASS_METAL: "clear glass with slender, dark metal frames",
    RailingMaterial.WOOD_SLATS: "elegant vertical wooden slats",
    RailingMaterial.DARK_METAL: "thin, vertical dark metal balusters (picket railing)",
}
DEFAULT_MATERIAL_PHRASE = "modern materials"

COZY_INTRO = [
    "Your task is to create an atmospheric, enhanced version of this balcony photo.",
    "Add modern, frameless balcony glazing to the image if there is none yet "
    "or the existing glazing looks outdated.",
]

COZY_OUTRO = [
    "Furnish the balcony in a modern and inviting way with a small table, a "
    "chair and plants.",
    "Change the lighting to a dark evening and add lit candles and warm lights "
    "on the balcony to create a very homely atmosphere.",
    "Make sure the result is photorealistic and looks like an enhanced version "
    "of the original photo.",
    "Return only the edited image without any text.",
]


class PromptSet(BaseModel):
    """Instruction strings for one request."""
    glazing: str
    modernization: str
    cozy_balcony: Optional[str] = None


def color_phrase(tag: Optional[str]) -> str:
    """Descriptive phrase for a color tag, generic tone when unknown."""
    color = FacadeColor.resolve(tag)
    if color is None:
        return DEFAULT_COLOR_PHRASE
    return COLOR_PHRASES[color]


def material_phrase(tag: Optional[str]) -> str:
    """Descriptive phrase for a railing material tag, generic when unknown."""
    material = RailingMaterial.resolve(tag)
    if material is None:
        return DEFAULT_MATERIAL_PHRASE
    return MATERIAL_PHRASES[material]


def build_glazing_prompt() -> str:
    return GLAZING_PROMPT


def build_modernization_prompt(choices: ModernizationChoices) -> str:
    """
    Build the facade modernization prompt.

    Clause order matters: the selected recolor/railing clauses come after the
    structural preservation clause and refine it without loosening it.

    Args:
        choices: Requester's modernization selection

    Returns:
        Prompt text
    """
    parts = [
        CONSISTENCY_DIRECTIVE,
        BASE_GLAZING_INSTRUCTION,
        STRUCTURE_PRESERVATION_CLAUSE,
    ]

    if choices.selects(ModernizationOption.FACADE):
        parts.append(
            f"Change the main color of the ENTIRE facade to "
            f"{color_phrase(choices.facade_color)}. Make sure the coloring is "
            "COMPLETELY even and covers all wall surfaces without exception, "
            "including the back walls of the balconies."
        )

    if choices.selects(ModernizationOption.RAILINGS):
        parts.append(
            "Replace ALL existing balcony railings without exception with new "
            f"ones made of {material_phrase(choices.railing_material)}. The change "
            "must be completely uniform across the ENTIRE building."
        )

    parts.append(MODERNIZATION_CLOSING)
    return " ".join(parts)


def build_cozy_balcony_prompt(choices: ModernizationChoices) -> str:
    """Build the prompt for the evening-atmosphere balcony edit."""
    parts = list(COZY_INTRO)

    if choices.selects(ModernizationOption.RAILINGS):
        parts.append(
            "Especially important: replace the balcony railing in the original "
            "photo entirely with a new railing made of "
            f"{material_phrase(choices.railing_material)}."
        )

    parts.extend(COZY_OUTRO)
    return " ".join(parts)


def build_prompts(choices: ModernizationChoices, has_secondary: bool) -> PromptSet:
    """All prompts applicable to a request; the cozy prompt only with a balcony photo."""
    return PromptSet(
        glazing=build_glazing_prompt(),
        modernization=build_modernization_prompt(choices),
        cozy_balcony=build_cozy_balcony_prompt(choices) if has_secondary else None,
    )
