"""REST client for the JSONPlaceholder-style API.

Implements `core.interfaces.api.PlaceholderAPI` on top of `fetch_json`:
one method per endpoint, bodies decoded into domain records.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_async_client, fetch_json
from core.config import AppSettings
from core.domain.models import Album, Comment, Post, User
from core.interfaces.api import PlaceholderAPI


logger = logging.getLogger("userdeck.api")

T = TypeVar("T")

_USERS = TypeAdapter(list[User])
_POSTS = TypeAdapter(list[Post])
_COMMENTS = TypeAdapter(list[Comment])
_ALBUMS = TypeAdapter(list[Album])


class JsonPlaceholderClient(PlaceholderAPI):
    """Read-only API client sharing one `httpx.AsyncClient`.

    Use as an async context manager, or pass an already built client (the
    caller then owns its lifetime).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        if client is None:
            client = build_async_client(self._settings, transport=transport)
        self._client = client

    async def __aenter__(self) -> "JsonPlaceholderClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_list(
        self,
        path: str,
        adapter: TypeAdapter[list[T]],
        params: dict[str, str] | None = None,
    ) -> list[T] | None:
        payload: Any = await fetch_json(self._client, path, params=params)
        if payload is None:
            return None
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            logger.error("Unexpected payload from %s: %s", path, exc)
            return None

    async def fetch_users(self) -> list[User] | None:
        return await self._get_list("/users", _USERS)

    async def fetch_user_posts(self, user_id: int) -> list[Post] | None:
        return await self._get_list(
            f"/users/{user_id}/posts",
            _POSTS,
            params={"_expand": "user"},
        )

    async def fetch_post_comments(self, post_id: int) -> list[Comment] | None:
        return await self._get_list(f"/posts/{post_id}/comments", _COMMENTS)

    async def fetch_user_albums(self, user_id: int) -> list[Album] | None:
        return await self._get_list(
            f"/users/{user_id}/albums",
            _ALBUMS,
            params={"_expand": "user", "_embed": "photos"},
        )
