from __future__ import annotations

from typing import Sequence

from .dictionaries import (
    DEFAULT_SECTIONS,
    DEFAULT_STYLE,
    DEFAULT_THEME,
    FEATURE_RULES,
    SECTION_RULES,
    STYLE_RULES,
    THEME_PALETTES,
    KeywordRule,
)
from .models.site import FeatureTag, SectionId, StyleTag, TemplateConfig, ThemeId


def resolve_theme(theme: str | ThemeId | None) -> ThemeId:
    """Return the matching theme, or the default theme for unknown values."""
    if isinstance(theme, ThemeId):
        return theme
    try:
        return ThemeId((theme or "").strip().lower())
    except ValueError:
        return DEFAULT_THEME


class PromptAnalyzer:
    def __init__(
        self,
        *,
        section_rules: Sequence[KeywordRule[SectionId]] = SECTION_RULES,
        feature_rules: Sequence[KeywordRule[FeatureTag]] = FEATURE_RULES,
        style_rules: Sequence[KeywordRule[StyleTag]] = STYLE_RULES,
        default_sections: Sequence[SectionId] = DEFAULT_SECTIONS,
    ) -> None:
        self._section_rules = tuple(section_rules)
        self._feature_rules = tuple(feature_rules)
        self._style_rules = tuple(style_rules)
        self._default_sections = tuple(default_sections)

    def analyze(self, prompt: str, theme: str | ThemeId | None) -> TemplateConfig:
        lowered = prompt.lower()
        resolved_theme = resolve_theme(theme)
        return TemplateConfig(
            theme=resolved_theme,
            colors=THEME_PALETTES[resolved_theme],
            sections=self._detect_sections(lowered),
            features=self._detect_features(lowered),
            style=self._detect_style(lowered),
        )

    def _detect_sections(self, lowered: str) -> list[SectionId]:
        sections = [SectionId.hero]
        for rule in self._section_rules:
            if rule.matches(lowered) and rule.tag not in sections:
                sections.append(rule.tag)
        if len(sections) == 1:
            sections.extend(self._default_sections)
        return sections

    def _detect_features(self, lowered: str) -> list[FeatureTag]:
        return [rule.tag for rule in self._feature_rules if rule.matches(lowered)]

    def _detect_style(self, lowered: str) -> StyleTag:
        style = DEFAULT_STYLE
        for rule in self._style_rules:
            if rule.matches(lowered):
                style = rule.tag
        return style


__all__ = ["PromptAnalyzer", "resolve_theme"]
