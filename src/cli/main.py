"""Userdeck CLI (Typer).

The terminal plays the browser: each command bootstraps the user list and
then dispatches the same actions a click would (load posts, load albums,
toggle comments) through the interaction controller.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.api_client import JsonPlaceholderClient
from adapters.json_exporter import export_document_json
from adapters.page_exporter import export_page_html
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import print_banner, print_document
from core.config import AppSettings
from core.domain.models import Post, User
from core.domain.view_state import Action
from core.errors import UserdeckError
from core.services.controller import InteractionController

app = typer.Typer(no_args_is_help=True, help="Browse users, posts and albums from a JSONPlaceholder-style API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

Flow = Callable[[InteractionController], Awaitable[None]]


@dataclass
class CliState:
    settings: AppSettings


def _build_api(settings: AppSettings) -> JsonPlaceholderClient:
    return JsonPlaceholderClient(settings)


async def _session(settings: AppSettings, flow: Flow | None = None) -> InteractionController:
    async with _build_api(settings) as api:
        controller = InteractionController(api)
        controller.bind()
        await controller.bootstrap()
        if flow is not None:
            await flow(controller)
    return controller


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        state = CliState(settings=AppSettings())
        ctx.obj = state
    return state


def _export(controller: InteractionController, html_path: Path | None, json_path: Path | None) -> None:
    if html_path is not None:
        out = export_page_html(document=controller.document, output_path=html_path)
        _console.print(f"[green]HTML written to:[/green] {out}")
    if json_path is not None:
        out = export_document_json(controller=controller, output_path=json_path)
        _console.print(f"[green]JSON written to:[/green] {out}")


def _run(ctx: typer.Context, flow: Flow | None, html_path: Path | None, json_path: Path | None) -> None:
    settings = _state(ctx).settings
    try:
        controller = asyncio.run(_session(settings, flow))
    except UserdeckError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    print_document(_console, controller)
    _export(controller, html_path, json_path)


def _html_option() -> Optional[Path]:
    return typer.Option(None, "--export-html", help="Write the page as HTML.")


def _json_option() -> Optional[Path]:
    return typer.Option(None, "--export-json", help="Write the displayed records as JSON.")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL (overrides USERDECK_BASE_URL)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    try:
        settings = AppSettings(base_url=base_url) if base_url else AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    configure_logging(settings.log_level, verbose=verbose)
    ctx.obj = CliState(settings=settings)


@app.command()
def users(
    ctx: typer.Context,
    export_html: Optional[Path] = _html_option(),
    export_json: Optional[Path] = _json_option(),
) -> None:
    """Load and list every user."""

    _run(ctx, None, export_html, export_json)


@app.command()
def posts(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="User whose posts are loaded."),
    comments: list[int] = typer.Option([], "--comments", "-c", help="Post id whose comments are toggled open (repeatable)."),
    export_html: Optional[Path] = _html_option(),
    export_json: Optional[Path] = _json_option(),
) -> None:
    """Load a user's posts, optionally opening some comment lists."""

    async def flow(controller: InteractionController) -> None:
        user_node = controller.find_node(User, user_id)
        if not await controller.dispatch(Action.LOAD_POSTS, user_node):
            return
        for post_id in comments:
            await controller.dispatch(Action.TOGGLE_COMMENTS, controller.find_node(Post, post_id))

    _run(ctx, flow, export_html, export_json)


@app.command()
def albums(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="User whose albums are loaded."),
    export_html: Optional[Path] = _html_option(),
    export_json: Optional[Path] = _json_option(),
) -> None:
    """Load a user's albums with their photos."""

    async def flow(controller: InteractionController) -> None:
        await controller.dispatch(Action.LOAD_ALBUMS, controller.find_node(User, user_id))

    _run(ctx, flow, export_html, export_json)


_BROWSE_HELP = (
    "posts <user id> | albums <user id> | toggle <post id> | show | "
    "export <file.html|file.json> | quit"
)


def _parse_id(parts: list[str]) -> int:
    if len(parts) != 2 or not (parts[1].isascii() and parts[1].isdecimal()):
        raise typer.BadParameter(f"expected '{parts[0]} <id>'")
    return int(parts[1])


async def _browse_step(controller: InteractionController, line: str) -> bool:
    """Run one interactive command; False means quit."""

    parts = line.split()
    if not parts:
        return True
    command = parts[0].lower()

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        _console.print(_BROWSE_HELP)
    elif command == "show":
        print_document(_console, controller)
    elif command == "posts":
        await controller.dispatch(Action.LOAD_POSTS, controller.find_node(User, _parse_id(parts)))
        print_document(_console, controller)
    elif command == "albums":
        await controller.dispatch(Action.LOAD_ALBUMS, controller.find_node(User, _parse_id(parts)))
        print_document(_console, controller)
    elif command == "toggle":
        await controller.dispatch(Action.TOGGLE_COMMENTS, controller.find_node(Post, _parse_id(parts)))
        print_document(_console, controller)
    elif command == "export":
        if len(parts) != 2:
            raise typer.BadParameter("expected 'export <path>'")
        path = Path(parts[1])
        if path.suffix.lower() == ".json":
            _export(controller, None, path)
        else:
            _export(controller, path, None)
    else:
        raise typer.BadParameter(f"unknown command '{command}'. {_BROWSE_HELP}")
    return True


@app.command()
def browse(ctx: typer.Context) -> None:
    """Interactive session: every command stands in for a click.

    Input is read synchronously; only the dispatched action runs on the
    session's event loop, which lives as long as the API client.
    """

    settings = _state(ctx).settings
    print_banner(_console)

    api = _build_api(settings)
    controller = InteractionController(api)
    controller.bind()
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(controller.bootstrap())
        print_document(_console, controller)
        _console.print(f"[dim]{_BROWSE_HELP}[/dim]")
        while True:
            line = typer.prompt("userdeck", default="", show_default=False)
            try:
                if not loop.run_until_complete(_browse_step(controller, line)):
                    break
            except (UserdeckError, typer.BadParameter) as exc:
                _console.print(f"[red]{exc}[/red]")
    finally:
        loop.run_until_complete(api.aclose())
        loop.close()


def run() -> None:
    app()
