"""Single-page HTML export of the document.

Why it lives in adapters:
- HTML files are an infrastructure detail (Jinja2).
- The Core only knows the `Document` and its fragments.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from adapters.html_renderer import get_env
from core.domain.document import Document


def render_page_html(*, document: Document, title: str = "Userdeck") -> str:
    """Render a self-contained page with every section of the document.

    Inactive sections are kept in the markup and hidden by the stylesheet.
    """

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    template = get_env().get_template("page.html")
    return template.render(
        title=title,
        containers=list(document.containers.values()),
        generated_at=generated_at,
    )


def export_page_html(*, document: Document, output_path: Path, title: str = "Userdeck") -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_page_html(document=document, title=title)
    output_path.write_text(html, encoding="utf-8")
    return output_path
