import httpx
import pytest
from pydantic import SecretStr

from site_synthesizer.models.result import GenerationSource
from site_synthesizer.normalizer import CONVERTED_WARNING
from site_synthesizer.orchestrator import GenerationOrchestrator
from site_synthesizer.settings import GenerationMode, GeneratorSettings

RELAY_URL = "https://relay.example.com/webhook/site"

PAGE = (
    "<!DOCTYPE html>\n<html lang=\"en\">\n<head><title>Bakery</title></head>\n<body>\n"
    + "<p class=\"text-lg\">Fresh bread every morning, baked with love and local flour.</p>\n" * 4
    + "</body>\n</html>"
)

COMPONENT = """import React from 'react';

export default function Bakery() {
  return (
    <main className="p-8">
      <h1 className="text-5xl font-bold">Fresh bread every morning</h1>
      <p className="text-lg">Baked with love and local flour, delivered to your door.</p>
    </main>
  );
}
"""


def _settings(**overrides) -> GeneratorSettings:
    values = {"credential": SecretStr("key-123"), "relay_url": RELAY_URL}
    values.update(overrides)
    return GeneratorSettings(**values)


def _orchestrator(settings: GeneratorSettings, handler) -> GenerationOrchestrator:
    return GenerationOrchestrator(settings, transport=httpx.MockTransport(handler))


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected external call to {request.url}")


def test_settings_mode_selection():
    assert GeneratorSettings().mode == GenerationMode.template
    assert GeneratorSettings(credential=SecretStr("")).mode == GenerationMode.template
    assert _settings().mode == GenerationMode.relay
    assert _settings(prefer_direct=True).mode == GenerationMode.direct
    assert _settings(relay_url=None).mode == GenerationMode.direct


@pytest.mark.asyncio
async def test_without_credential_uses_template_only():
    result = await _orchestrator(GeneratorSettings(), _unreachable).generate(
        "A modern portfolio for a photographer with a gallery and contact form", "portfolio"
    )

    assert result.source == GenerationSource.template
    assert result.warnings == []
    assert result.html.startswith("<!DOCTYPE html>")
    assert '<section id="gallery"' in result.html
    assert '<section id="contact"' in result.html
    assert "#8B5CF6" in result.html


@pytest.mark.asyncio
async def test_relay_output_with_trailing_prose_is_accepted():
    handler = lambda request: httpx.Response(200, json={"output": f"{PAGE} some trailing prose"})  # noqa: E731

    result = await _orchestrator(_settings(), handler).generate("A bakery", "tech")

    assert result.source == GenerationSource.external_relay
    assert result.html == PAGE
    assert result.warnings == []


@pytest.mark.asyncio
async def test_relay_acknowledgement_falls_back_with_configuration_warning():
    handler = lambda request: httpx.Response(200, json={"message": "workflow was started"})  # noqa: E731

    result = await _orchestrator(_settings(), handler).generate("A bakery with pricing", "tech")

    assert result.source == GenerationSource.template
    assert '<section id="pricing"' in result.html
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert warning.startswith("Relay generation failed: Webhook Configuration Error")
    assert "When Last Node Finishes" in warning
    assert warning.endswith("Used template fallback.")


@pytest.mark.asyncio
async def test_direct_candidate_text_is_accepted():
    payload = {"candidates": [{"content": {"parts": [{"text": f"```html\n{PAGE}\n```"}]}}]}
    handler = lambda request: httpx.Response(200, json=payload)  # noqa: E731

    result = await _orchestrator(_settings(prefer_direct=True), handler).generate("A bakery", "blog")

    assert result.source == GenerationSource.external_direct
    assert result.html == PAGE


@pytest.mark.asyncio
async def test_component_output_is_converted_and_flagged():
    handler = lambda request: httpx.Response(200, json={"code": COMPONENT})  # noqa: E731

    result = await _orchestrator(_settings(), handler).generate("A bakery", "ecommerce")

    assert result.source == GenerationSource.external_relay
    assert result.warnings == [CONVERTED_WARNING]
    assert '<main class="p-8">' in result.html
    assert "import React" not in result.html


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "fragment"),
    [
        (httpx.Response(401, text="denied"), "Authentication error"),
        (httpx.Response(429, text="slow down"), "Rate limit"),
        (httpx.Response(200, json={"status": "done"}), "No HTML found"),
        (httpx.Response(200, json={"html": "<html>too short</html>"}), "too short"),
        (httpx.Response(200, json={"html": "<div>" + "x" * 300 + "</div>"}), "no <html> element"),
        (httpx.Response(200, json={"code": "export const x = 1;"}), "no return block"),
    ],
)
async def test_failures_fall_back_to_template(response, fragment):
    result = await _orchestrator(_settings(), lambda request: response).generate("A bakery", "tech")

    assert result.source == GenerationSource.template
    assert result.html.startswith("<!DOCTYPE html>")
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Relay generation failed:")
    assert fragment in result.warnings[0]


@pytest.mark.asyncio
async def test_direct_network_failure_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    result = await _orchestrator(_settings(relay_url=None), handler).generate("A bakery", "saas")

    assert result.source == GenerationSource.template
    assert result.warnings[0].startswith("Direct API generation failed: Cannot reach Gemini API")


@pytest.mark.asyncio
async def test_external_call_is_attempted_once():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="boom")

    await _orchestrator(_settings(), handler).generate("A bakery", "tech")

    assert len(calls) == 1


def test_generate_from_template_keeps_given_warnings():
    orchestrator = GenerationOrchestrator(GeneratorSettings())

    result = orchestrator.generate_from_template("pricing", "unknown-theme", warnings=["earlier"])

    assert result.source == GenerationSource.template
    assert result.warnings == ["earlier"]
    assert "#8B5CF6" in result.html


@pytest.mark.asyncio
async def test_malformed_relay_url_falls_back_to_template():
    settings = _settings(relay_url="http://[::1/webhook/x")

    result = await _orchestrator(settings, _unreachable).generate("A bakery", "tech")

    assert result.source == GenerationSource.template
    assert result.html.startswith("<!DOCTYPE html>")
    assert result.warnings[0].startswith("Relay generation failed: Invalid Relay webhook URL")
