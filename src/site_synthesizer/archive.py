from __future__ import annotations

import io
import zipfile
from datetime import datetime

from .analyzer import resolve_theme
from .models.site import ThemeId

INDEX_FILENAME = "index.html"
README_FILENAME = "README.md"


def build_readme(theme: ThemeId) -> str:
    return (
        "# Generated Website\n\n"
        f"Theme: {theme.value}\n\n"
        "Generated with Site Synthesizer\n\n"
        "## Usage\n\n"
        "Open index.html in your browser to view the website.\n"
    )


def build_site_archive(html: str, theme: str | ThemeId) -> bytes:
    """Package the page and a short README into a zip; the markup is stored as-is."""
    resolved = resolve_theme(theme)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(INDEX_FILENAME, html.encode("utf-8"))
        archive.writestr(README_FILENAME, build_readme(resolved))
    return buffer.getvalue()


def archive_filename(theme: str | ThemeId, timestamp: datetime | None = None) -> str:
    moment = timestamp or datetime.now()
    return f"website-{resolve_theme(theme).value}-{int(moment.timestamp() * 1000)}.zip"


__all__ = ["archive_filename", "build_readme", "build_site_archive"]
