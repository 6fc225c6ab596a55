"""Contract for the REST API client.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The controller depends on this abstraction, so tests can pass a fake
  client and the HTTP adapter stays swappable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Album, Comment, Post, User


@runtime_checkable
class PlaceholderAPI(Protocol):
    """Minimal read-only API surface.

    Design rules:
    - Every method is async because it performs I/O (HTTP).
    - Failures never raise: they are logged and surface as `None`.
    """

    async def fetch_users(self) -> list[User] | None:
        """`GET /users`."""

        ...

    async def fetch_user_posts(self, user_id: int) -> list[Post] | None:
        """`GET /users/{id}/posts?_expand=user`."""

        ...

    async def fetch_post_comments(self, post_id: int) -> list[Comment] | None:
        """`GET /posts/{id}/comments`."""

        ...

    async def fetch_user_albums(self, user_id: int) -> list[Album] | None:
        """`GET /users/{id}/albums?_expand=user&_embed=photos`."""

        ...
