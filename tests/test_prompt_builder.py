"""Tests for prompt construction."""

import pytest

from facade_agent.core.prompt_builder import (
    BASE_GLAZING_INSTRUCTION,
    COLOR_PHRASES,
    CONSISTENCY_DIRECTIVE,
    DEFAULT_COLOR_PHRASE,
    DEFAULT_MATERIAL_PHRASE,
    GLAZING_PROMPT,
    MATERIAL_PHRASES,
    MODERNIZATION_CLOSING,
    STRUCTURE_PRESERVATION_CLAUSE,
    build_cozy_balcony_prompt,
    build_modernization_prompt,
    build_prompts,
    color_phrase,
    material_phrase,
)
from facade_agent.models.enums import FacadeColor, RailingMaterial
from facade_agent.models.schemas import ModernizationChoices


def choices(options=(), color=None, material=None) -> ModernizationChoices:
    return ModernizationChoices(
        options=frozenset(options),
        facade_color=color,
        railing_material=material,
    )


class TestLookups:
    """Color and material tags resolve to phrases, never fail."""

    @pytest.mark.parametrize("color", list(FacadeColor))
    def test_known_colors(self, color):
        assert color_phrase(color.value) == COLOR_PHRASES[color]

    @pytest.mark.parametrize("material", list(RailingMaterial))
    def test_known_materials(self, material):
        assert material_phrase(material.value) == MATERIAL_PHRASES[material]

    @pytest.mark.parametrize("tag", [None, "", "neon-pink", "  ", "BEIGE!"])
    def test_unknown_color_falls_back(self, tag):
        assert color_phrase(tag) == DEFAULT_COLOR_PHRASE

    @pytest.mark.parametrize("tag", [None, "", "marble", "wood slats"])
    def test_unknown_material_falls_back(self, tag):
        assert material_phrase(tag) == DEFAULT_MATERIAL_PHRASE

    def test_tags_are_normalized(self):
        assert color_phrase("  Brick-Red ") == COLOR_PHRASES[FacadeColor.BRICK_RED]

    def test_legacy_finnish_tags(self):
        assert color_phrase("vaaleanharmaa") == COLOR_PHRASES[FacadeColor.LIGHT_GRAY]
        assert color_phrase("tiilenpunainen") == COLOR_PHRASES[FacadeColor.BRICK_RED]
        assert material_phrase("puusaleet") == MATERIAL_PHRASES[RailingMaterial.WOOD_SLATS]
        assert material_phrase("tumma-metalli") == MATERIAL_PHRASES[RailingMaterial.DARK_METAL]


class TestGlazingPrompt:
    """The glazing prompt is a constant."""

    def test_independent_of_choices(self):
        a = build_prompts(choices(), has_secondary=False)
        b = build_prompts(choices(["facade", "railings"], "white", "glass-metal"), has_secondary=True)
        assert a.glazing == b.glazing == GLAZING_PROMPT

    def test_states_preservation_and_image_only(self):
        assert "frameless glazing" in GLAZING_PROMPT
        assert "Return only the edited image." in GLAZING_PROMPT


class TestModernizationPrompt:
    """Clause order and optional clauses."""

    def test_no_options_has_only_fixed_clauses(self):
        prompt = build_modernization_prompt(choices())
        assert prompt == " ".join([
            CONSISTENCY_DIRECTIVE,
            BASE_GLAZING_INSTRUCTION,
            STRUCTURE_PRESERVATION_CLAUSE,
            MODERNIZATION_CLOSING,
        ])

    def test_clause_order(self):
        prompt = build_modernization_prompt(
            choices(["railings", "facade"], "beige", "dark-metal")
        )
        positions = [
            prompt.index(CONSISTENCY_DIRECTIVE),
            prompt.index(BASE_GLAZING_INSTRUCTION),
            prompt.index(STRUCTURE_PRESERVATION_CLAUSE),
            prompt.index(COLOR_PHRASES[FacadeColor.BEIGE]),
            prompt.index(MATERIAL_PHRASES[RailingMaterial.DARK_METAL]),
            prompt.index(MODERNIZATION_CLOSING),
        ]
        assert positions == sorted(positions)
        assert prompt.endswith(MODERNIZATION_CLOSING)

    def test_color_without_facade_option_is_ignored(self):
        prompt = build_modernization_prompt(choices(["railings"], "beige", "wood-slats"))
        assert COLOR_PHRASES[FacadeColor.BEIGE] not in prompt
        assert MATERIAL_PHRASES[RailingMaterial.WOOD_SLATS] in prompt

    def test_unknown_color_uses_generic_tone(self):
        prompt = build_modernization_prompt(choices(["facade"], "neon-pink"))
        assert DEFAULT_COLOR_PHRASE in prompt

    def test_missing_color_uses_generic_tone(self):
        prompt = build_modernization_prompt(choices(["facade"]))
        assert DEFAULT_COLOR_PHRASE in prompt

    def test_unknown_railing_uses_generic_materials(self):
        prompt = build_modernization_prompt(choices(["railings"], material="marble"))
        assert DEFAULT_MATERIAL_PHRASE in prompt

    def test_unknown_options_are_ignored(self):
        assert build_modernization_prompt(choices(["roof", "windows"])) == \
            build_modernization_prompt(choices())


class TestCozyBalconyPrompt:
    """Cozy prompt only exists with a balcony photo."""

    def test_absent_without_secondary(self):
        assert build_prompts(choices(["railings"]), has_secondary=False).cozy_balcony is None

    def test_present_with_secondary(self):
        prompts = build_prompts(choices(), has_secondary=True)
        assert prompts.cozy_balcony == build_cozy_balcony_prompt(choices())

    def test_mentions_furnishing_and_evening_light(self):
        prompt = build_cozy_balcony_prompt(choices())
        assert "small table" in prompt
        assert "candles" in prompt
        assert prompt.endswith("Return only the edited image without any text.")

    def test_railing_clause_only_when_selected(self):
        without = build_cozy_balcony_prompt(choices(material="wood-slats"))
        with_railings = build_cozy_balcony_prompt(choices(["railings"], material="wood-slats"))
        assert MATERIAL_PHRASES[RailingMaterial.WOOD_SLATS] not in without
        assert MATERIAL_PHRASES[RailingMaterial.WOOD_SLATS] in with_railings

    def test_unknown_railing_uses_generic_materials(self):
        prompt = build_cozy_balcony_prompt(choices(["railings"], material="bamboo"))
        assert DEFAULT_MATERIAL_PHRASE in prompt
