from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel

from .errors import MissingRootElement, TooShort

MIN_MARKUP_LENGTH = 200

_ROOT_OPEN = re.compile(r"<html", re.IGNORECASE)


class RejectionReason(str, Enum):
    too_short = "too_short"
    missing_root_element = "missing_root_element"


class ValidationResult(BaseModel):
    accepted: bool
    reason: RejectionReason | None = None
    detail: str | None = None

    def raise_for_rejection(self) -> None:
        if self.accepted:
            return
        if self.reason == RejectionReason.too_short:
            raise TooShort(self.detail or "Generated HTML is too short")
        raise MissingRootElement(self.detail or "Generated content has no <html> element")


class MarkupValidator:
    """Structural smoke test applied to markup from every generation path."""

    def __init__(self, *, min_length: int = MIN_MARKUP_LENGTH) -> None:
        self._min_length = min_length

    def validate(self, markup: str) -> ValidationResult:
        if len(markup) < self._min_length:
            return ValidationResult(
                accepted=False,
                reason=RejectionReason.too_short,
                detail=f"Generated HTML is too short ({len(markup)} < {self._min_length} chars)",
            )
        if not _ROOT_OPEN.search(markup):
            return ValidationResult(
                accepted=False,
                reason=RejectionReason.missing_root_element,
                detail="Generated content has no <html> element",
            )
        return ValidationResult(accepted=True)


__all__ = ["MIN_MARKUP_LENGTH", "MarkupValidator", "RejectionReason", "ValidationResult"]
