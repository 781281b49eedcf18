from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

import httpx

from .analyzer import PromptAnalyzer, resolve_theme
from .clients.gemini import GeminiClient
from .clients.relay import RelayClient
from .composer import TemplateComposer
from .errors import GenerationError
from .extraction import ResponsePayloadExtractor
from .models.result import GenerationResult, GenerationSource
from .models.site import ThemeId
from .normalizer import MarkupNormalizer
from .settings import GenerationMode, GeneratorSettings
from .validator import MarkupValidator

logger = logging.getLogger(__name__)

ROUTE_LABELS = {
    GenerationSource.external_relay: "Relay",
    GenerationSource.external_direct: "Direct API",
}


class GenerationOrchestrator:
    """Run one generation request to completion.

    The external path (relay or direct, chosen by ``settings.mode``) is tried
    once; any ``GenerationError`` along extract, normalize, or validate falls
    back to the deterministic template, so ``generate`` always returns markup.
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        *,
        analyzer: PromptAnalyzer | None = None,
        composer: TemplateComposer | None = None,
        extractor: ResponsePayloadExtractor | None = None,
        normalizer: MarkupNormalizer | None = None,
        validator: MarkupValidator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._analyzer = analyzer or PromptAnalyzer()
        self._composer = composer or TemplateComposer()
        self._extractor = extractor or ResponsePayloadExtractor()
        self._normalizer = normalizer or MarkupNormalizer()
        self._validator = validator or MarkupValidator()
        self._transport = transport

    async def generate(self, prompt: str, theme: str | ThemeId) -> GenerationResult:
        resolved_theme = resolve_theme(theme)
        mode = self.settings.mode
        logger.info(
            "Starting generation",
            extra={"mode": mode.value, "theme": resolved_theme.value, "prompt_length": len(prompt)},
        )
        if mode == GenerationMode.template:
            return self.generate_from_template(prompt, resolved_theme)

        source, call = self._external_call(mode)
        try:
            payload = await call(prompt, resolved_theme.value)
            return self._accept_payload(payload, source, prompt, resolved_theme)
        except GenerationError as exc:
            logger.warning(
                "External generation failed; using template fallback",
                extra={
                    "source": source.value,
                    "error_type": type(exc).__name__,
                    "error": exc.message,
                    "status_code": exc.status_code,
                },
            )
            warning = f"{ROUTE_LABELS[source]} generation failed: {exc.message}. Used template fallback."
            return self.generate_from_template(prompt, resolved_theme, warnings=[warning])

    def generate_from_template(
        self,
        prompt: str,
        theme: str | ThemeId,
        *,
        warnings: list[str] | None = None,
    ) -> GenerationResult:
        config = self._analyzer.analyze(prompt, theme)
        html = self._composer.compose(config, prompt)
        logger.info(
            "Generated site from template",
            extra={
                "theme": config.theme.value,
                "sections": [section.value for section in config.sections],
                "html_length": len(html),
            },
        )
        return GenerationResult(html=html, source=GenerationSource.template, warnings=list(warnings or []))

    def _accept_payload(
        self,
        payload: Any,
        source: GenerationSource,
        prompt: str,
        theme: ThemeId,
    ) -> GenerationResult:
        candidate = self._extractor.extract(payload)
        normalized = self._normalizer.normalize(candidate.text, theme, prompt)
        self._validator.validate(normalized.markup).raise_for_rejection()
        logger.info(
            "Accepted external markup",
            extra={
                "source": source.value,
                "field": candidate.field,
                "html_length": len(normalized.markup),
                "warnings": list(normalized.warnings),
            },
        )
        return GenerationResult(html=normalized.markup, source=source, warnings=list(normalized.warnings))

    def _external_call(
        self, mode: GenerationMode
    ) -> tuple[GenerationSource, Callable[[str, str], Awaitable[Any]]]:
        settings = self.settings
        if mode == GenerationMode.relay:
            relay = RelayClient(
                relay_url=settings.relay_url or "",
                credential=settings.credential_value(),
                timeout=settings.request_timeout,
                transport=self._transport,
            )
            return GenerationSource.external_relay, relay.request_site
        gemini = GeminiClient(
            credential=settings.credential_value(),
            model_name=settings.model_name,
            timeout=settings.request_timeout,
            transport=self._transport,
        )
        return GenerationSource.external_direct, gemini.generate_site


__all__ = ["GenerationOrchestrator"]
