from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from pydantic import SecretStr

from .settings import GeneratorSettings

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    def load(self) -> GeneratorSettings:
        ...

    def save(self, settings: GeneratorSettings) -> None:
        ...


class InMemorySettingsStore:
    def __init__(self, settings: GeneratorSettings | None = None) -> None:
        self._settings = settings or GeneratorSettings()
        self._lock = threading.Lock()

    def load(self) -> GeneratorSettings:
        with self._lock:
            return self._settings

    def save(self, settings: GeneratorSettings) -> None:
        with self._lock:
            self._settings = settings


class LocalSettingsStore:
    """Keeps the credential and relay URL in a JSON file across restarts."""

    def __init__(self, *, path: Path, defaults: GeneratorSettings | None = None) -> None:
        self._path = path
        self._defaults = defaults or GeneratorSettings()
        self._lock = threading.Lock()

    def load(self) -> GeneratorSettings:
        """Return the saved settings layered over the defaults.

        A ``credential`` key saved as null is an explicit clear and wins over
        the default credential; an absent key keeps the default. An unreadable
        file is logged and ignored.
        """
        with self._lock:
            if not self._path.exists():
                return self._defaults
            try:
                with self._path.open("r", encoding="utf-8") as fp:
                    data = json.load(fp)
            except (OSError, ValueError) as exc:
                logger.warning(
                    "Ignoring unreadable settings file",
                    extra={"path": str(self._path), "error": str(exc)},
                )
                return self._defaults
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file without an object", extra={"path": str(self._path)})
            return self._defaults

        credential = self._defaults.credential
        if "credential" in data:
            credential = SecretStr(data["credential"]) if data["credential"] else None
        return self._defaults.model_copy(
            update={
                "credential": credential,
                "relay_url": data.get("relay_url") or None,
                "prefer_direct": bool(data.get("prefer_direct", False)),
            }
        )

    def save(self, settings: GeneratorSettings) -> None:
        data = {
            "credential": settings.credential_value() or None,
            "relay_url": settings.relay_url,
            "prefer_direct": settings.prefer_direct,
        }
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
        logger.info(
            "Saved generator settings",
            extra={"path": str(self._path), "mode": settings.mode.value},
        )


__all__ = ["InMemorySettingsStore", "LocalSettingsStore", "SettingsStore"]
