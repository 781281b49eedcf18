from __future__ import annotations

import logging
import os
from enum import Enum

from google.cloud import secretmanager
from pydantic import BaseModel, Field, SecretStr

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"
CREDENTIAL_SECRET_ID = "gemini-api-key"


class GenerationMode(str, Enum):
    template = "template"
    relay = "relay"
    direct = "direct"


class GeneratorSettings(BaseModel):
    """Credential and endpoint configuration for one orchestrator.

    No credential selects the template-only path; a relay URL selects the
    relay unless ``prefer_direct`` is set.
    """

    credential: SecretStr | None = None
    relay_url: str | None = None
    prefer_direct: bool = False
    model_name: str = DEFAULT_MODEL
    request_timeout: float = Field(default=60.0, gt=0)

    @property
    def mode(self) -> GenerationMode:
        if not self.credential or not self.credential.get_secret_value():
            return GenerationMode.template
        if self.relay_url and not self.prefer_direct:
            return GenerationMode.relay
        return GenerationMode.direct

    def credential_value(self) -> str:
        return self.credential.get_secret_value() if self.credential else ""

    @classmethod
    def from_env(cls, *, project_id: str | None = None) -> "GeneratorSettings":
        """Build settings from the environment.

        Args:
            project_id: GCP project used to look the credential up in Secret
                Manager when ``GEMINI_API_KEY`` is not set

        Returns:
            GeneratorSettings instance
        """
        project_id = project_id or os.getenv("PROJECT_ID")
        credential = os.getenv("GEMINI_API_KEY")
        if not credential and project_id:
            credential = _get_secret(project_id, CREDENTIAL_SECRET_ID)

        return cls(
            credential=SecretStr(credential) if credential else None,
            relay_url=os.getenv("RELAY_WEBHOOK_URL") or None,
            prefer_direct=os.getenv("USE_DIRECT_API", "false").lower() in {"1", "true", "yes"},
            model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
        )


def _get_secret(project_id: str, secret_id: str) -> str | None:
    """Fetch secret from Secret Manager.

    Args:
        project_id: GCP project ID
        secret_id: Secret ID

    Returns:
        Secret value or None if not found
    """
    try:
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(name=name)
        return response.payload.data.decode("UTF-8")
    except Exception as exc:
        logger.warning(
            f"Failed to fetch secret {secret_id}: {exc}",
            exc_info=True,
        )
        return None


__all__ = ["CREDENTIAL_SECRET_ID", "DEFAULT_MODEL", "GenerationMode", "GeneratorSettings"]
