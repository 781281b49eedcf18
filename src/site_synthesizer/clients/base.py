from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..errors import AuthFailure, RateLimited, TransportFailure

logger = logging.getLogger(__name__)


class JsonPostClient:
    """Shared plumbing for the services that receive a single JSON POST.

    A fresh ``httpx.AsyncClient`` is opened per call so concurrent requests
    never share connection state. ``transport`` lets callers substitute an
    ``httpx.MockTransport``.
    """

    service_name = "service"

    def __init__(self, *, timeout: float = 60.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport

    async def _post(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            try:
                response = await client.post(url, json=dict(payload), headers=headers, params=params)
            except httpx.InvalidURL as exc:
                logger.error(f"Invalid URL for {self.service_name}: {exc}")
                raise TransportFailure(f"Invalid {self.service_name} URL: {exc}") from exc
            except httpx.HTTPError as exc:
                logger.error(f"Network error calling {self.service_name}: {exc}")
                raise TransportFailure(self._network_error_message(url, exc)) from exc

        logger.info(
            f"{self.service_name} responded",
            extra={
                "status_code": response.status_code,
                "content_type": response.headers.get("content-type"),
                "body_length": len(response.content),
            },
        )
        if response.is_success:
            return response
        raise self._status_error(response)

    def _status_error(self, response: httpx.Response) -> Exception:
        status = response.status_code
        body = response.text
        if status in (401, 403):
            return AuthFailure(
                f"Authentication error ({status}). Check your Google Gemini API key.",
                status_code=status,
                response=body,
            )
        if status == 429:
            return RateLimited(
                "Rate limit exceeded. Please wait a moment and try again.",
                status_code=status,
                response=body,
            )
        return TransportFailure(
            f"{self.service_name} error ({status}): {body[:150]}",
            status_code=status,
            response=body,
        )

    def _network_error_message(self, url: str, exc: httpx.HTTPError) -> str:
        return f"Cannot reach {self.service_name}: {exc}"


__all__ = ["JsonPostClient"]
