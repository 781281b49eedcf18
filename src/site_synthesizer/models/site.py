from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ThemeId(str, Enum):
    portfolio = "portfolio"
    tech = "tech"
    ecommerce = "ecommerce"
    blog = "blog"
    saas = "saas"

    @property
    def label(self) -> str:
        return THEME_LABELS[self]


THEME_LABELS: dict[ThemeId, str] = {
    ThemeId.portfolio: "Portfolio",
    ThemeId.tech: "Tech",
    ThemeId.ecommerce: "E-commerce",
    ThemeId.blog: "Blog",
    ThemeId.saas: "SaaS",
}


class SectionId(str, Enum):
    """Page sections, declared in section-priority order."""

    hero = "hero"
    about = "about"
    features = "features"
    pricing = "pricing"
    team = "team"
    gallery = "gallery"
    testimonials = "testimonials"
    contact = "contact"
    faq = "faq"


class FeatureTag(str, Enum):
    responsive = "responsive"
    modern = "modern"
    minimal = "minimal"
    animated = "animated"
    dark_mode = "darkMode"


class StyleTag(str, Enum):
    modern = "modern"
    minimal = "minimal"
    bold = "bold"
    elegant = "elegant"


class ColorPalette(BaseModel):
    primary: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")
    secondary: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")
    accent: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")

    model_config = {"frozen": True}


class TemplateConfig(BaseModel):
    theme: ThemeId
    colors: ColorPalette
    sections: list[SectionId]
    features: list[FeatureTag] = Field(default_factory=list)
    style: StyleTag = StyleTag.modern

    @field_validator("sections")
    @classmethod
    def _sections_start_with_hero(cls, value: list[SectionId]) -> list[SectionId]:
        if not value or value[0] != SectionId.hero:
            raise ValueError("sections must begin with the hero section")
        if len(set(value)) != len(value):
            raise ValueError("sections must not contain duplicates")
        return value

    @field_validator("features")
    @classmethod
    def _features_are_unique(cls, value: list[FeatureTag]) -> list[FeatureTag]:
        return list(dict.fromkeys(value))


__all__ = [
    "ColorPalette",
    "FeatureTag",
    "SectionId",
    "StyleTag",
    "TemplateConfig",
    "THEME_LABELS",
    "ThemeId",
]
