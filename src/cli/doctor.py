"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client, fetch_json
from adapters.page_exporter import export_page_html
from core.config import AppSettings, get_user_env_file
from core.domain.document import Document

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    async with build_async_client(settings) as client:
        payload = await fetch_json(client, "/users")
    if payload is None:
        return False, "GET /users failed (see log)"
    if not isinstance(payload, list):
        return False, f"GET /users returned {type(payload).__name__}, expected a list"
    return True, f"GET /users -> {len(payload)} users"


def _check_templates() -> tuple[bool, str]:
    """Render an empty page to make sure the templates load."""

    try:
        with tempfile.TemporaryDirectory() as tmp:
            export_page_html(document=Document(), output_path=Path(tmp) / "doctor.html")
        return True, "OK"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics."""

    settings = getattr(ctx.obj, "settings", None) or AppSettings()

    table = Table(title="Userdeck Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    timeout = settings.http_timeout_seconds
    table.add_row("HTTP timeout", "OK", f"{timeout}s" if timeout else "none")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API", "OK" if ok_api else "FAIL", detail_api)

    ok_tpl, detail_tpl = _check_templates()
    table.add_row("Templates", "OK" if ok_tpl else "FAIL", detail_tpl)

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)
