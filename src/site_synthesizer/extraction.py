from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from .errors import ShapeNotFound
from .models.result import ExtractedCandidate

logger = logging.getLogger(__name__)


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _field(name: str) -> Callable[[Any], str | None]:
    def locate(payload: Any) -> str | None:
        if isinstance(payload, dict):
            return _text(payload.get(name))
        return None

    return locate


def _first_generated_text(payload: Any) -> str | None:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        return _text(payload[0].get("generated_text"))
    return None


def _gemini_candidate_text(payload: Any) -> str | None:
    """Read ``candidates[0].content.parts[0].text``."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    return _text(parts[0].get("text"))


@dataclass(frozen=True)
class PayloadShape:
    name: str
    locate: Callable[[Any], str | None]


# Earlier shapes win when a payload matches several.
DEFAULT_SHAPES: Sequence[PayloadShape] = (
    PayloadShape("html", _field("html")),
    PayloadShape("code", _field("code")),
    PayloadShape("output", _field("output")),
    PayloadShape("result", _field("result")),
    PayloadShape("generated_text", _field("generated_text")),
    PayloadShape("[0].generated_text", _first_generated_text),
    PayloadShape("candidates[0].content.parts[0].text", _gemini_candidate_text),
    PayloadShape("<string>", _text),
)


def payload_keys(payload: Any) -> list[str]:
    if isinstance(payload, dict):
        return [str(key) for key in payload]
    if isinstance(payload, list):
        return [f"[{index}]" for index in range(len(payload))]
    return []


class ResponsePayloadExtractor:
    def __init__(self, *, shapes: Sequence[PayloadShape] = DEFAULT_SHAPES) -> None:
        self._shapes = tuple(shapes)

    def extract(self, payload: Any) -> ExtractedCandidate:
        for shape in self._shapes:
            text = shape.locate(payload)
            if text is not None:
                logger.debug(
                    "Located markup candidate",
                    extra={"field": shape.name, "candidate_length": len(text)},
                )
                return ExtractedCandidate(field=shape.name, text=text)
        raise ShapeNotFound(payload_keys(payload))


__all__ = ["DEFAULT_SHAPES", "PayloadShape", "ResponsePayloadExtractor", "payload_keys"]
