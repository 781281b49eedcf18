from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Mapping, Sequence, TypeVar

from .models.site import ColorPalette, FeatureTag, SectionId, StyleTag, ThemeId

TagT = TypeVar("TagT")


@dataclass(frozen=True)
class KeywordRule(Generic[TagT]):
    """Maps a disjunction of trigger words to a tag.

    Triggers are matched as plain substrings of the lower-cased prompt.
    """

    tag: TagT
    triggers: Sequence[str]

    def matches(self, lowered_prompt: str) -> bool:
        return any(trigger in lowered_prompt for trigger in self.triggers)


DEFAULT_THEME: ThemeId = ThemeId.portfolio


THEME_PALETTES: Mapping[ThemeId, ColorPalette] = {
    ThemeId.portfolio: ColorPalette(primary="#8B5CF6", secondary="#EC4899", accent="#F59E0B"),
    ThemeId.tech: ColorPalette(primary="#3B82F6", secondary="#06B6D4", accent="#8B5CF6"),
    ThemeId.ecommerce: ColorPalette(primary="#10B981", secondary="#F59E0B", accent="#EF4444"),
    ThemeId.blog: ColorPalette(primary="#EF4444", secondary="#F97316", accent="#EC4899"),
    ThemeId.saas: ColorPalette(primary="#6366F1", secondary="#8B5CF6", accent="#06B6D4"),
}


# Evaluated in this order; the order is the section-priority order on the page.
SECTION_RULES: Sequence[KeywordRule[SectionId]] = (
    KeywordRule(SectionId.about, ("about", "story")),
    KeywordRule(SectionId.features, ("feature", "service")),
    KeywordRule(SectionId.pricing, ("pricing", "plan")),
    KeywordRule(SectionId.team, ("team", "member")),
    KeywordRule(SectionId.gallery, ("gallery", "portfolio", "work")),
    KeywordRule(SectionId.testimonials, ("testimonial", "review")),
    KeywordRule(SectionId.contact, ("contact", "form")),
    KeywordRule(SectionId.faq, ("faq", "question")),
)

DEFAULT_SECTIONS: Sequence[SectionId] = (SectionId.features, SectionId.contact)


FEATURE_RULES: Sequence[KeywordRule[FeatureTag]] = (
    KeywordRule(FeatureTag.responsive, ("responsive",)),
    KeywordRule(FeatureTag.modern, ("modern",)),
    KeywordRule(FeatureTag.minimal, ("minimal",)),
    KeywordRule(FeatureTag.animated, ("animation",)),
    KeywordRule(FeatureTag.dark_mode, ("dark",)),
)


# Later rules override earlier ones when several match.
STYLE_RULES: Sequence[KeywordRule[StyleTag]] = (
    KeywordRule(StyleTag.minimal, ("minimal", "clean")),
    KeywordRule(StyleTag.bold, ("bold", "vibrant")),
    KeywordRule(StyleTag.elegant, ("elegant", "luxury")),
)

DEFAULT_STYLE: StyleTag = StyleTag.modern


__all__ = [
    "DEFAULT_SECTIONS",
    "DEFAULT_STYLE",
    "DEFAULT_THEME",
    "FEATURE_RULES",
    "KeywordRule",
    "SECTION_RULES",
    "STYLE_RULES",
    "THEME_PALETTES",
]
