from __future__ import annotations

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field


class GenerationSource(str, Enum):
    template = "template"
    external_direct = "externalDirect"
    external_relay = "externalRelay"


class GenerationResult(BaseModel):
    html: str = ""
    source: GenerationSource
    warnings: Sequence[str] = Field(default_factory=list)


class ExtractedCandidate(BaseModel):
    field: str
    text: str


class NormalizedMarkup(BaseModel):
    markup: str
    warnings: Sequence[str] = Field(default_factory=list)


__all__ = ["ExtractedCandidate", "GenerationResult", "GenerationSource", "NormalizedMarkup"]
