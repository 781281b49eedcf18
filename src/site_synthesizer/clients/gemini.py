from __future__ import annotations

import logging
from typing import Any

import httpx

from ..composer import STYLE_LIBRARY_URL
from ..errors import TransportFailure
from ..settings import DEFAULT_MODEL
from .base import JsonPostClient

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

SYSTEM_INSTRUCTION = (
    "You are an HTML file generator. You ONLY output valid HTML documents. "
    "NEVER output JSX, React components, or code with 'import' or 'export' statements. "
    "NEVER use 'className' - always use 'class'. "
    "Your response must start with <!DOCTYPE html> and end with </html>. "
    "Do not include any markdown code fences or explanations."
)

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.3,
    "topK": 20,
    "topP": 0.8,
    "maxOutputTokens": 8192,
}


def build_site_prompt(prompt: str, theme: str) -> str:
    return f"""ROLE: You are a raw HTML file generator. You output ONLY valid HTML documents.

FORBIDDEN:
1. DO NOT write "import React" or any imports
2. DO NOT write "export default" or any exports
3. DO NOT use "className=" - this is JSX, not HTML
4. DO NOT use {{curlyBraces}} for variables - this is JSX
5. DO NOT wrap output in ```jsx or ```html markers
6. DO NOT write ANY text before <!DOCTYPE html>
7. DO NOT write ANY explanations after </html>
8. DO NOT create React components or functions

REQUIRED:
1. The first 15 characters MUST be: "<!DOCTYPE html>"
2. Use "class=" not "className="
3. Put JavaScript inside <script> tags
4. Create a complete standalone HTML file
5. Include: <script src="{STYLE_LIBRARY_URL}"></script>
6. Make it responsive with Tailwind classes
7. The last tag MUST be: </html>

TASK: Create an HTML page for: {prompt}
THEME: {theme}

YOUR OUTPUT (start with <!DOCTYPE html> immediately):"""


class GeminiClient(JsonPostClient):
    """Direct call to the Generative Language ``generateContent`` endpoint."""

    service_name = "Gemini API"

    def __init__(
        self,
        *,
        credential: str,
        model_name: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.model_name = model_name
        self._credential = credential

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_BASE_URL}/{self.model_name}:generateContent"

    def build_request(self, prompt: str, theme: str) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": build_site_prompt(prompt, theme)}]}],
            "generationConfig": dict(GENERATION_CONFIG),
        }

    async def generate_site(self, prompt: str, theme: str) -> Any:
        """Ask the model for a page and return the decoded response body.

        Raises:
            ExternalCallError: on transport, status, or API-level failures
        """
        request = self.build_request(prompt, theme)
        response = await self._post(
            self.endpoint,
            request,
            headers={"Content-Type": "application/json"},
            params={"key": self._credential},
        )
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportFailure("Gemini API returned a non-JSON body", response=response.text[:200]) from exc

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            detail = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            raise TransportFailure(f"Gemini API error: {detail}", response=data)

        logger.info(
            "Generated content with Gemini",
            extra={
                "model": self.model_name,
                "input_length": len(request["contents"][0]["parts"][0]["text"]),
                "candidates": len(data.get("candidates") or []) if isinstance(data, dict) else 0,
            },
        )
        return data

    def _status_error(self, response: httpx.Response) -> Exception:
        if response.status_code == 400:
            return TransportFailure(
                "Invalid request. Check your API key and try again.",
                status_code=400,
                response=response.text,
            )
        return super()._status_error(response)


__all__ = ["GEMINI_BASE_URL", "GeminiClient", "SYSTEM_INSTRUCTION", "build_site_prompt"]
