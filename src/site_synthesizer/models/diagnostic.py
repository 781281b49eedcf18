from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel


class DiagnosticStatus(str, Enum):
    success = "success"
    warning = "warning"
    error = "error"


class DiagnosticResult(BaseModel):
    check: str
    status: DiagnosticStatus
    message: str
    details: Mapping[str, Any] | None = None


__all__ = ["DiagnosticResult", "DiagnosticStatus"]
