from __future__ import annotations

import copy
from typing import Any

import httpx
import pytest

from adapters.api_client import JsonPlaceholderClient
from core.config import AppSettings
from core.services.controller import InteractionController


BASE_URL = "https://api.test"

USERS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "company": {
            "name": "Romaguera-Crona",
            "catchPhrase": "Multi-layered client-server neural-net",
            "bs": "harness real-time e-markets",
        },
    },
    {
        "id": 2,
        "name": "Ervin Howell",
        "username": "Antonette",
        "email": "Shanna@melissa.tv",
        "company": {
            "name": "Deckow-Crist",
            "catchPhrase": "Proactive didactic contingency",
            "bs": "synergize scalable supply-chains",
        },
    },
]

POSTS: dict[int, list[dict[str, Any]]] = {
    1: [
        {"id": 11, "userId": 1, "title": "sunt aut facere", "body": "quia et suscipit"},
        {"id": 12, "userId": 1, "title": "<em>qui est esse</em>", "body": "est rerum tempore"},
    ],
    2: [
        {"id": 21, "userId": 2, "title": "et ea vero", "body": "delectus reiciendis"},
    ],
}

COMMENTS: dict[int, list[dict[str, Any]]] = {
    11: [
        {"id": 1, "postId": 11, "name": "a", "email": "Eliseo@gardner.biz", "body": "first comment"},
        {"id": 2, "postId": 11, "name": "b", "email": "Jayne_Kuhic@sydney.com", "body": "second comment"},
        {"id": 3, "postId": 11, "name": "c", "email": "Nikita@garfield.biz", "body": "third comment"},
    ],
    12: [],
    21: [
        {"id": 4, "postId": 21, "name": "d", "email": "Lew@alysha.tv", "body": "lonely comment"},
    ],
}

ALBUMS: dict[int, list[dict[str, Any]]] = {
    1: [
        {
            "id": 101,
            "userId": 1,
            "title": "quidem molestiae enim",
            "photos": [
                {
                    "id": 1,
                    "albumId": 101,
                    "title": "accusamus beatae",
                    "url": "https://via.placeholder.com/600/92c952",
                    "thumbnailUrl": "https://via.placeholder.com/150/92c952",
                },
                {
                    "id": 2,
                    "albumId": 101,
                    "title": "reprehenderit est",
                    "url": "https://via.placeholder.com/600/771796",
                    "thumbnailUrl": "https://via.placeholder.com/150/771796",
                },
            ],
        },
        {"id": 102, "userId": 1, "title": "sunt qui excepturi", "photos": []},
    ],
}


class FakeAPIServer:
    """In-memory stand-in for the REST API, mounted on `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.failing: set[str] = set()

    def count(self, path: str) -> int:
        return sum(1 for request in self.calls if request.url.path == path)

    def _user(self, user_id: int) -> dict[str, Any]:
        return next(u for u in USERS if u["id"] == user_id)

    def _expand(self, request: httpx.Request, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        items = copy.deepcopy(items)
        if request.url.params.get("_expand") == "user":
            for item in items:
                item["user"] = self._user(item["userId"])
        if request.url.params.get("_embed") != "photos":
            for item in items:
                item.pop("photos", None)
        return items

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path
        if path in self.failing:
            return httpx.Response(500, json={"error": "boom"})

        parts = path.strip("/").split("/")
        if parts == ["users"]:
            return httpx.Response(200, json=USERS)
        if len(parts) == 3 and parts[0] == "users" and parts[2] == "posts":
            return httpx.Response(200, json=self._expand(request, POSTS.get(int(parts[1]), [])))
        if len(parts) == 3 and parts[0] == "users" and parts[2] == "albums":
            return httpx.Response(200, json=self._expand(request, ALBUMS.get(int(parts[1]), [])))
        if len(parts) == 3 and parts[0] == "posts" and parts[2] == "comments":
            return httpx.Response(200, json=COMMENTS.get(int(parts[1]), []))
        return httpx.Response(404, json={})


@pytest.fixture
def server() -> FakeAPIServer:
    return FakeAPIServer()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(base_url=BASE_URL)


@pytest.fixture
def transport(server: FakeAPIServer) -> httpx.MockTransport:
    return httpx.MockTransport(server.handler)


@pytest.fixture
async def api(settings: AppSettings, transport: httpx.MockTransport):
    async with JsonPlaceholderClient(settings, transport=transport) as client:
        yield client


@pytest.fixture
def controller(api: JsonPlaceholderClient) -> InteractionController:
    controller = InteractionController(api)
    controller.bind()
    return controller
