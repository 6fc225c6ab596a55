"""Fragment rendering (Jinja2).

Why it lives in adapters:
- HTML is an infrastructure detail; the Core only sees `Fragment` objects.

Rendering rules:
- Pure: record in, fragment out. Records are never attached to fragments.
- No escaping. API text is trusted and rendered as-is, so autoescape is off.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from core.domain.document import Fragment
from core.domain.models import Album, Comment, Photo, Post, User, author_username
from core.domain.view_state import CommentsState


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache(maxsize=1)
def get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=False,
    )


def _render(template_name: str, **context: object) -> str:
    return get_env().get_template(template_name).render(**context).strip()


def user_node_id(user: User) -> str:
    return f"user-{user.id}"


def post_node_id(post: Post) -> str:
    return f"post-{post.id}"


def album_node_id(album: Album) -> str:
    return f"album-{album.id}"


def comment_node_id(post_node: str, index: int) -> str:
    return f"{post_node}-comment-{index}"


def render_user(user: User) -> Fragment:
    """User card with its POSTS/ALBUMS buttons."""

    node_id = user_node_id(user)
    html = _render("user_card.html", user=user, node_id=node_id)
    return Fragment(node_id=node_id, kind="user", html=html)


def render_comment(comment: Comment, node_id: str) -> Fragment:
    html = _render("comment_line.html", comment=comment, node_id=node_id)
    return Fragment(node_id=node_id, kind="comment", html=html)


def render_post(
    post: Post,
    *,
    state: CommentsState = CommentsState.COLLAPSED,
    comment_lines: Sequence[Fragment] = (),
) -> Fragment:
    """Post card; `comment_lines` are shown in the given order."""

    node_id = post_node_id(post)
    html = _render(
        "post_card.html",
        post=post,
        node_id=node_id,
        username=author_username(post),
        expanded=state is CommentsState.EXPANDED,
        verb=state.verb,
        count=len(post.comments) if post.comments is not None else None,
        comment_lines=comment_lines,
    )
    return Fragment(node_id=node_id, kind="post", html=html)


def render_photo(photo: Photo) -> str:
    return _render("photo_card.html", photo=photo)


def render_album(album: Album) -> Fragment:
    """Album card with every embedded photo, in API order."""

    node_id = album_node_id(album)
    html = _render(
        "album_card.html",
        album=album,
        node_id=node_id,
        username=author_username(album),
        photos=[render_photo(photo) for photo in album.photos],
    )
    return Fragment(node_id=node_id, kind="album", html=html)
