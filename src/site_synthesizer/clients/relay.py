"""Client for the optional relay workflow (an n8n-style webhook).

The relay receives ``{prompt, theme, geminiKey}`` and is expected to answer
with the generated page in one of the payload shapes the extractor knows.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..errors import RelayConfigurationError, RelayWorkflowError, TransportFailure
from ..extraction import payload_keys
from .base import JsonPostClient

logger = logging.getLogger(__name__)

TEST_WEBHOOK_SEGMENT = "/webhook-test/"
PRODUCTION_WEBHOOK_SEGMENT = "/webhook/"
WORKFLOW_STARTED_MESSAGES = frozenset({"workflow was started", "Workflow was started"})

RELAY_STATUS_MESSAGES: dict[int, str] = {
    404: "Webhook not found. Check: 1) Workflow is ACTIVE 2) Correct webhook URL",
    500: "Relay workflow error. Check your workflow configuration.",
    503: "Model is loading or webhook unavailable. Please try again in a moment.",
}


def is_test_webhook(url: str) -> bool:
    return TEST_WEBHOOK_SEGMENT in url


def production_webhook_url(url: str) -> str:
    return url.replace(TEST_WEBHOOK_SEGMENT, PRODUCTION_WEBHOOK_SEGMENT)


def decode_relay_body(response: httpx.Response) -> Any:
    """Decode the relay body, accepting bare HTML served with any content type."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFailure("Relay returned malformed JSON", response=response.text) from exc

    text = response.text
    try:
        return json.loads(text)
    except ValueError:
        if "<!DOCTYPE" in text or "<html" in text:
            return {"html": text}
        raise TransportFailure("Invalid response format from webhook", response=text[:200])


def check_relay_payload(payload: Any) -> None:
    """Reject acknowledgements and workflow errors before extraction."""
    if not isinstance(payload, dict):
        return
    if payload.get("message") in WORKFLOW_STARTED_MESSAGES:
        raise RelayConfigurationError(
            "Webhook Configuration Error: the relay answered 'workflow was started'. "
            "Set the webhook Response Mode to 'When Last Node Finishes'",
            response=payload,
        )
    if payload.get("error"):
        raise RelayWorkflowError(f"Relay workflow error: {payload['error']}", response=payload)


class RelayClient(JsonPostClient):
    service_name = "Relay webhook"

    def __init__(
        self,
        *,
        relay_url: str,
        credential: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.relay_url = relay_url
        self._credential = credential

    async def request_site(self, prompt: str, theme: str) -> Any:
        """Send the prompt to the relay and return its decoded payload.

        Raises:
            ExternalCallError: on transport, status, or relay-level failures
        """
        logger.info(
            "Calling relay webhook",
            extra={"prompt_preview": prompt[:100], "theme": theme, "has_credential": bool(self._credential)},
        )
        response = await self._post(
            self.relay_url,
            {"prompt": prompt, "theme": theme, "geminiKey": self._credential},
            headers={"Accept": "application/json"},
        )
        payload = decode_relay_body(response)
        logger.debug("Relay payload decoded", extra={"available_keys": payload_keys(payload)})
        check_relay_payload(payload)
        return payload

    def _status_error(self, response: httpx.Response) -> Exception:
        message = RELAY_STATUS_MESSAGES.get(response.status_code)
        if message is None:
            return super()._status_error(response)
        return TransportFailure(message, status_code=response.status_code, response=response.text)

    def _network_error_message(self, url: str, exc: httpx.HTTPError) -> str:
        if is_test_webhook(url):
            return (
                f"Cannot reach relay: you are using the TEST URL. "
                f"Use {production_webhook_url(url)} instead"
            )
        return (
            f"Cannot reach relay webhook ({exc}). Check: 1) Workflow is ACTIVE "
            f"2) the relay is accessible 3) URL is correct"
        )


__all__ = [
    "RelayClient",
    "check_relay_payload",
    "decode_relay_body",
    "is_test_webhook",
    "production_webhook_url",
]
