from __future__ import annotations

from typing import Mapping

from .models.site import ColorPalette, SectionId, TemplateConfig
from .sections import SECTION_BUILDERS, SectionBuilder, build_footer, build_header

DOCTYPE = "<!DOCTYPE html>"
STYLE_LIBRARY_URL = "https://cdn.tailwindcss.com"


def build_head(title: str, colors: ColorPalette) -> str:
    return f"""<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script src="{STYLE_LIBRARY_URL}"></script>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{ font-family: 'Inter', system-ui, -apple-system, sans-serif; }}
        .gradient-text {{
            background: linear-gradient(135deg, {colors.primary} 0%, {colors.secondary} 100%);
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
            background-clip: text;
        }}
        @keyframes fadeInUp {{
            from {{ opacity: 0; transform: translateY(30px); }}
            to {{ opacity: 1; transform: translateY(0); }}
        }}
        .animate-fade-in-up {{
            animation: fadeInUp 0.6s ease-out;
        }}
    </style>
</head>"""


class TemplateComposer:
    def __init__(self, *, builders: Mapping[SectionId, SectionBuilder] = SECTION_BUILDERS) -> None:
        self._builders = builders

    def compose(self, config: TemplateConfig, prompt: str) -> str:
        colors = config.colors
        brand = config.theme.label
        title = f"{brand} Website"
        body = "\n".join(self._builders[section](colors, prompt) for section in config.sections)
        return f"""{DOCTYPE}
<html lang="en">
{build_head(title, colors)}
<body class="bg-gray-50">
    {build_header(colors, brand)}
    {body}
    {build_footer(colors, brand)}
</body>
</html>"""


__all__ = ["DOCTYPE", "STYLE_LIBRARY_URL", "TemplateComposer", "build_head"]
