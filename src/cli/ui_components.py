"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by one-shot commands and the browse session.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Album, Post, User, author_username
from core.domain.view_state import CommentsState, Section
from core.services.controller import InteractionController


def print_banner(console: Console) -> None:
    title = Text("USERDECK", style="bold cyan")
    subtitle = Text("Users • Posts • Albums", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_users_table(users: list[User]) -> Table:
    table = Table(title="Users")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Username", style="green")
    table.add_column("Contact", style="magenta")
    table.add_column("Works for", style="white")
    for user in users:
        table.add_row(str(user.id), user.name, user.username, user.email, user.company.name)
    return table


def build_post_panel(post: Post, state: CommentsState) -> Panel:
    """One post card; comments listed newest-arrival first when expanded."""

    body = Text()
    body.append(post.body.strip() + "\n")
    if state is CommentsState.EXPANDED:
        for comment in reversed(post.comments or []):
            body.append(f"\n{comment.body} --- {comment.email}", style="dim")
        body.append("\n")
    count = f"{len(post.comments)} " if post.comments is not None else ""
    body.append(f"\n({state.verb} {count}comments)", style="italic")

    title = Text.assemble((post.title, "bold"), f"  --- {author_username(post)}")
    return Panel(body, title=title, title_align="left", subtitle=f"post {post.id}", border_style="yellow")


def build_albums_table(albums: list[Album]) -> Table:
    table = Table(title="Albums")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("By", style="green")
    table.add_column("Photos", style="magenta", justify="right")
    for album in albums:
        table.add_row(str(album.id), album.title, author_username(album), str(len(album.photos)))
    return table


def print_document(console: Console, controller: InteractionController) -> None:
    """Print the visible sections in document order."""

    document = controller.document
    users = [controller.view_model[n] for n in document.users.node_ids()]
    if users:
        console.print(build_users_table(users))  # type: ignore[arg-type]
    else:
        console.print("[dim]No users loaded.[/dim]")

    active = document.active_section
    if active is Section.POSTS:
        panels = [
            build_post_panel(controller.post_views[n].post, controller.post_views[n].state)
            for n in document.posts.node_ids()
        ]
        console.print(Group(*panels) if panels else "[dim]No posts.[/dim]")
    elif active is Section.ALBUMS:
        albums = [controller.view_model[n] for n in document.albums.node_ids()]
        console.print(build_albums_table(albums))  # type: ignore[arg-type]
