"""Turn raw service output into a standalone HTML document.

Generation services wrap markup in code fences, surround it with prose, or
answer with UI-component source instead of a page. ``MarkupNormalizer``
undoes the first two and makes a best-effort conversion of the third. Every
step is idempotent, so normalizing already-normalized output is a no-op.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Callable, Sequence

from .analyzer import resolve_theme
from .composer import DOCTYPE, STYLE_LIBRARY_URL
from .errors import ConversionFailed
from .models.result import NormalizedMarkup
from .models.site import ThemeId

logger = logging.getLogger(__name__)

CONVERTED_WARNING = "Converted component-style source to a standalone HTML document"
CLASS_ATTRIBUTE_WARNING = (
    "Document contained the framework attribute 'className'; rewrote it to 'class'"
)

FENCE_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"```html\n?", re.IGNORECASE),
    re.compile(r"```jsx\n?", re.IGNORECASE),
    re.compile(r"```javascript\n?", re.IGNORECASE),
    re.compile(r"```\n?"),
)

FRAMEWORK_CLASS_ATTRIBUTE = "className="
STANDARD_CLASS_ATTRIBUTE = "class="

_DOCTYPE_MARKER = re.compile(r"<!DOCTYPE", re.IGNORECASE)
_DOCTYPE_PREFIX = re.compile(r"^<!DOCTYPE\s+html", re.IGNORECASE)
_ROOT_PREFIX = re.compile(r"^<html[\s>]", re.IGNORECASE)
_MODULE_LINE = re.compile(r"^[ \t]*(?:import|export)\b.*$", re.MULTILINE)
_RETURN_BLOCK = re.compile(r"return\s*\(([\s\S]*)\)\s*;?\s*\}\s*;?\s*$")
_DOCUMENT_SPAN = re.compile(r"(<!DOCTYPE html>[\s\S]*</html>)", re.IGNORECASE)
_ROOT_SPAN = re.compile(r"(<html[\s\S]*</html>)", re.IGNORECASE)


@dataclass(frozen=True)
class ComponentSignal:
    name: str
    present: Callable[[str], bool]


COMPONENT_SIGNALS: Sequence[ComponentSignal] = (
    ComponentSignal("export statement", lambda text: re.search(r"\bexport\s", text) is not None),
    ComponentSignal("import statement", lambda text: re.search(r"\bimport\s", text) is not None),
    ComponentSignal("framework class attribute", lambda text: FRAMEWORK_CLASS_ATTRIBUTE in text),
    ComponentSignal("arrow-function component", lambda text: "const " in text and "= () =>" in text),
    ComponentSignal("function with return block", lambda text: "function " in text and "return (" in text),
)


def strip_code_fences(text: str) -> str:
    for pattern in FENCE_PATTERNS:
        text = pattern.sub("", text)
    return text.strip()


def component_signals(text: str) -> list[str]:
    return [signal.name for signal in COMPONENT_SIGNALS if signal.present(text)]


def is_component_source(text: str) -> bool:
    """True when the text reads as UI-component source rather than a page.

    A document-type declaration anywhere in the text overrides every signal.
    """
    if _DOCTYPE_MARKER.search(text):
        return False
    return bool(component_signals(text))


def document_shell(body: str, theme: ThemeId, prompt: str) -> str:
    description = html.escape(" ".join(prompt.split()), quote=True)
    return f"""{DOCTYPE}
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta name="description" content="{description}">
  <title>{theme.label} Website</title>
  <script src="{STYLE_LIBRARY_URL}"></script>
</head>
<body>
{body}
</body>
</html>"""


def convert_component_source(text: str, theme: ThemeId, prompt: str) -> str:
    """Lift the JSX returned by a component into a document body.

    Raises:
        ConversionFailed: no ``return ( ... )`` block closes the component.
    """
    stripped = _MODULE_LINE.sub("", text)
    stripped = stripped.replace(FRAMEWORK_CLASS_ATTRIBUTE, STANDARD_CLASS_ATTRIBUTE)
    match = _RETURN_BLOCK.search(stripped.strip())
    if not match:
        raise ConversionFailed("Response is component source with no return block to convert")
    return document_shell(match.group(1).strip(), theme, prompt)


def ensure_doctype(text: str) -> str:
    if not _DOCTYPE_PREFIX.match(text) and _ROOT_PREFIX.match(text):
        return f"{DOCTYPE}\n{text}"
    return text


def extract_document(text: str) -> str:
    """Drop prose before the declaration and after the last closing root tag."""
    match = _DOCUMENT_SPAN.search(text)
    if match:
        return match.group(1)
    match = _ROOT_SPAN.search(text)
    if match:
        return f"{DOCTYPE}\n{match.group(1)}"
    return text


class MarkupNormalizer:
    def normalize(self, candidate: str, theme: str | ThemeId | None, prompt: str = "") -> NormalizedMarkup:
        warnings: list[str] = []
        text = strip_code_fences(candidate)

        if is_component_source(text):
            signals = component_signals(text)
            logger.warning(
                "Response looks like component source; converting",
                extra={"signals": signals, "candidate_length": len(text)},
            )
            text = convert_component_source(text, resolve_theme(theme), prompt)
            warnings.append(CONVERTED_WARNING)
        elif FRAMEWORK_CLASS_ATTRIBUTE in text:
            # A declared document keeps its import/export text (module scripts
            # are legal); only the attribute that is never valid HTML is rewritten.
            text = text.replace(FRAMEWORK_CLASS_ATTRIBUTE, STANDARD_CLASS_ATTRIBUTE)
            warnings.append(CLASS_ATTRIBUTE_WARNING)

        text = ensure_doctype(text)
        text = extract_document(text)
        return NormalizedMarkup(markup=text, warnings=warnings)


__all__ = [
    "CLASS_ATTRIBUTE_WARNING",
    "CONVERTED_WARNING",
    "MarkupNormalizer",
    "component_signals",
    "convert_component_source",
    "ensure_doctype",
    "extract_document",
    "is_component_source",
    "strip_code_fences",
]
