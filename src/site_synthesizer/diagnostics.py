"""Step-by-step health check for a relay webhook.

Each check yields a ``DiagnosticResult`` so a failing relay can be diagnosed
without reading server logs: URL form, reachability, body format, response
mode, and whether the body carries usable markup.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .clients.relay import WORKFLOW_STARTED_MESSAGES, is_test_webhook, production_webhook_url
from .errors import ShapeNotFound
from .extraction import ResponsePayloadExtractor, payload_keys
from .models.diagnostic import DiagnosticResult, DiagnosticStatus
from .validator import MarkupValidator

logger = logging.getLogger(__name__)

DIAGNOSTIC_PROMPT = "Create a simple test page"
DIAGNOSTIC_THEME = "portfolio"


def check_url_format(relay_url: str) -> DiagnosticResult:
    if is_test_webhook(relay_url):
        return DiagnosticResult(
            check="url_format",
            status=DiagnosticStatus.error,
            message="Using TEST URL! Change '/webhook-test/' to '/webhook/'",
            details={"current": relay_url, "correct": production_webhook_url(relay_url)},
        )
    if "/webhook/" in relay_url:
        return DiagnosticResult(
            check="url_format",
            status=DiagnosticStatus.success,
            message="URL format is correct (using production URL)",
        )
    return DiagnosticResult(
        check="url_format",
        status=DiagnosticStatus.warning,
        message="Unusual webhook URL format",
        details={"url": relay_url},
    )


class RelayDiagnostic:
    def __init__(
        self,
        *,
        relay_url: str,
        credential: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        extractor: ResponsePayloadExtractor | None = None,
        validator: MarkupValidator | None = None,
    ) -> None:
        self.relay_url = relay_url
        self._credential = credential
        self._timeout = timeout
        self._transport = transport
        self._extractor = extractor or ResponsePayloadExtractor()
        self._validator = validator or MarkupValidator()

    async def run(self) -> list[DiagnosticResult]:
        results = [check_url_format(self.relay_url)]
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.post(
                    self.relay_url,
                    json={"prompt": DIAGNOSTIC_PROMPT, "theme": DIAGNOSTIC_THEME, "geminiKey": self._credential},
                    headers={"Accept": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Relay diagnostic could not connect", extra={"error": str(exc)})
            results.append(
                DiagnosticResult(
                    check="connection",
                    status=DiagnosticStatus.error,
                    message=f"Failed to connect: {exc}",
                    details={"error_type": type(exc).__name__},
                )
            )
            return results

        if not response.is_success:
            results.append(
                DiagnosticResult(
                    check="reachability",
                    status=DiagnosticStatus.error,
                    message=f"HTTP Error {response.status_code}",
                    details={"status": response.status_code, "reason": response.reason_phrase},
                )
            )
        else:
            results.append(
                DiagnosticResult(
                    check="reachability",
                    status=DiagnosticStatus.success,
                    message=f"Webhook is reachable (HTTP {response.status_code})",
                )
            )

        try:
            payload = json.loads(response.text)
        except ValueError:
            results.append(
                DiagnosticResult(
                    check="json",
                    status=DiagnosticStatus.error,
                    message="Response is not valid JSON",
                    details={"preview": response.text[:200]},
                )
            )
            return results

        results.append(self._check_response_mode(payload))
        results.append(self._check_markup(payload))
        results.append(self._check_error_field(payload))

        logger.info(
            "Relay diagnostic finished",
            extra={"errors": sum(1 for result in results if result.status == DiagnosticStatus.error)},
        )
        return results

    def _check_response_mode(self, payload: Any) -> DiagnosticResult:
        if isinstance(payload, dict) and payload.get("message") in WORKFLOW_STARTED_MESSAGES:
            return DiagnosticResult(
                check="response_mode",
                status=DiagnosticStatus.error,
                message=(
                    "Webhook responds immediately. Set Response Mode to "
                    "'When Last Node Finishes'"
                ),
                details={"response": payload},
            )
        return DiagnosticResult(
            check="response_mode",
            status=DiagnosticStatus.success,
            message="Webhook response mode is correct",
        )

    def _check_markup(self, payload: Any) -> DiagnosticResult:
        try:
            candidate = self._extractor.extract(payload)
        except ShapeNotFound:
            return DiagnosticResult(
                check="markup",
                status=DiagnosticStatus.error,
                message="No HTML found in response",
                details={"available_fields": payload_keys(payload)},
            )
        validation = self._validator.validate(candidate.text)
        if not validation.accepted:
            return DiagnosticResult(
                check="markup",
                status=DiagnosticStatus.error,
                message=validation.detail or "Content doesn't contain valid HTML",
                details={"field": candidate.field, "length": len(candidate.text)},
            )
        return DiagnosticResult(
            check="markup",
            status=DiagnosticStatus.success,
            message=f"Valid HTML found in '{candidate.field}' field ({len(candidate.text)} chars)",
        )

    def _check_error_field(self, payload: Any) -> DiagnosticResult:
        if isinstance(payload, dict) and payload.get("error"):
            return DiagnosticResult(
                check="workflow_error",
                status=DiagnosticStatus.error,
                message=f"Workflow returned error: {payload['error']}",
            )
        return DiagnosticResult(
            check="workflow_error",
            status=DiagnosticStatus.success,
            message="No errors in response",
        )


__all__ = ["RelayDiagnostic", "check_url_format"]
