from __future__ import annotations

import os
import uuid
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, SecretStr

from site_synthesizer.archive import archive_filename, build_site_archive
from site_synthesizer.diagnostics import RelayDiagnostic
from site_synthesizer.logging_config import set_trace_id, setup_logging
from site_synthesizer.models.diagnostic import DiagnosticResult
from site_synthesizer.models.result import GenerationResult
from site_synthesizer.orchestrator import GenerationOrchestrator
from site_synthesizer.settings import GenerationMode, GeneratorSettings
from site_synthesizer.settings_store import LocalSettingsStore


class GenerateSiteRequest(BaseModel):
    model_config = {"str_strip_whitespace": True}

    prompt: str = Field(min_length=1, description="Free-text description of the website")
    theme: str = Field(default="portfolio")


class ExportSiteRequest(BaseModel):
    html: str = Field(min_length=1)
    theme: str = Field(default="portfolio")


class SettingsUpdate(BaseModel):
    credential: str | None = None
    relay_url: str | None = None
    prefer_direct: bool = False


class SettingsResponse(BaseModel):
    mode: GenerationMode
    has_credential: bool
    relay_url: str | None
    prefer_direct: bool
    model_name: str

    @staticmethod
    def from_settings(settings: GeneratorSettings) -> "SettingsResponse":
        return SettingsResponse(
            mode=settings.mode,
            has_credential=bool(settings.credential_value()),
            relay_url=settings.relay_url,
            prefer_direct=settings.prefer_direct,
            model_name=settings.model_name,
        )


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
SETTINGS_PATH = Path(os.getenv("SETTINGS_PATH", "data/settings.json"))

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)

app = FastAPI(title="Site Synthesizer API", version="0.1.0")

settings_store = LocalSettingsStore(
    path=SETTINGS_PATH,
    defaults=GeneratorSettings.from_env(project_id=PROJECT_ID),
)


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("X-Cloud-Trace-Context") or str(uuid.uuid4()))
    return await call_next(request)


@app.post("/v1/sites:generate", response_model=GenerationResult)
async def generate_site(request: GenerateSiteRequest) -> GenerationResult:
    orchestrator = GenerationOrchestrator(settings_store.load())
    return await orchestrator.generate(request.prompt, request.theme)


@app.post("/v1/sites:export")
async def export_site(request: ExportSiteRequest) -> Response:
    archive = build_site_archive(request.html, request.theme)
    filename = archive_filename(request.theme)
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/v1/settings", response_model=SettingsResponse)
async def get_settings() -> SettingsResponse:
    return SettingsResponse.from_settings(settings_store.load())


@app.put("/v1/settings", response_model=SettingsResponse)
async def update_settings(update: SettingsUpdate) -> SettingsResponse:
    current = settings_store.load()
    settings = current.model_copy(
        update={
            "credential": SecretStr(update.credential) if update.credential else None,
            "relay_url": update.relay_url or None,
            "prefer_direct": update.prefer_direct,
        }
    )
    settings_store.save(settings)
    return SettingsResponse.from_settings(settings)


@app.post("/v1/relay:diagnose", response_model=list[DiagnosticResult])
async def diagnose_relay() -> list[DiagnosticResult]:
    settings = settings_store.load()
    if not settings.relay_url:
        raise HTTPException(status_code=400, detail="No relay URL configured")
    diagnostic = RelayDiagnostic(
        relay_url=settings.relay_url,
        credential=settings.credential_value(),
        timeout=settings.request_timeout,
    )
    return await diagnostic.run()


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
