from site_synthesizer.analyzer import PromptAnalyzer, resolve_theme
from site_synthesizer.dictionaries import THEME_PALETTES, KeywordRule
from site_synthesizer.models.site import FeatureTag, SectionId, StyleTag, ThemeId


def test_photographer_portfolio_prompt_selects_gallery_and_contact():
    config = PromptAnalyzer().analyze(
        "A modern portfolio for a photographer with a gallery and contact form", "portfolio"
    )

    assert config.theme == ThemeId.portfolio
    assert config.sections == [SectionId.hero, SectionId.gallery, SectionId.contact]
    assert config.colors == THEME_PALETTES[ThemeId.portfolio]
    assert (config.colors.primary, config.colors.secondary, config.colors.accent) == (
        "#8B5CF6",
        "#EC4899",
        "#F59E0B",
    )
    assert FeatureTag.modern in config.features


def test_single_trigger_adds_only_that_section():
    config = PromptAnalyzer().analyze("pricing", "saas")

    assert config.sections == [SectionId.hero, SectionId.pricing]


def test_prompt_without_triggers_gets_default_sections():
    config = PromptAnalyzer().analyze("Something nice for my cat", "tech")

    assert config.sections == [SectionId.hero, SectionId.features, SectionId.contact]


def test_sections_follow_priority_order_not_prompt_order():
    config = PromptAnalyzer().analyze("faq, then team, then about us", "blog")

    assert config.sections == [SectionId.hero, SectionId.about, SectionId.team, SectionId.faq]


def test_analyze_is_case_insensitive():
    config = PromptAnalyzer().analyze("PRICING and TESTIMONIALS", "saas")

    assert config.sections == [SectionId.hero, SectionId.pricing, SectionId.testimonials]


def test_unknown_theme_falls_back_to_portfolio_palette():
    config = PromptAnalyzer().analyze("pricing", "does-not-exist")

    assert config.theme == ThemeId.portfolio
    assert config.colors == THEME_PALETTES[ThemeId.portfolio]


def test_resolve_theme_accepts_enum_and_loose_strings():
    assert resolve_theme(ThemeId.ecommerce) == ThemeId.ecommerce
    assert resolve_theme("  Tech ") == ThemeId.tech
    assert resolve_theme(None) == ThemeId.portfolio
    assert resolve_theme("") == ThemeId.portfolio


def test_feature_and_style_detection():
    config = PromptAnalyzer().analyze("Responsive dark site with animation, bold and elegant", "tech")

    assert config.features == [FeatureTag.responsive, FeatureTag.animated, FeatureTag.dark_mode]
    # later style rules override earlier ones
    assert config.style == StyleTag.elegant


def test_style_defaults_to_modern():
    config = PromptAnalyzer().analyze("pricing", "tech")

    assert config.style == StyleTag.modern
    assert config.features == []


def test_custom_rules_are_evaluated_in_given_order():
    analyzer = PromptAnalyzer(
        section_rules=(
            KeywordRule(SectionId.faq, ("help",)),
            KeywordRule(SectionId.about, ("help",)),
        ),
        default_sections=(SectionId.contact,),
    )

    assert analyzer.analyze("help me", "tech").sections == [SectionId.hero, SectionId.faq, SectionId.about]
    assert analyzer.analyze("nothing", "tech").sections == [SectionId.hero, SectionId.contact]
