"""Tests for the HTML page and JSON exporters."""

import json

from adapters.json_exporter import document_payload, export_document_json
from adapters.page_exporter import export_page_html, render_page_html
from core.domain.document import Document
from core.domain.view_state import Action


def test_empty_page_has_every_section():
    html = render_page_html(document=Document())

    assert '<section id="user-list" class="active">' in html
    assert '<section id="post-list">' in html
    assert '<section id="album-list">' in html


async def test_page_marks_active_section(controller, tmp_path):
    await controller.bootstrap()
    await controller.dispatch(Action.LOAD_ALBUMS, "user-1")

    out = export_page_html(document=controller.document, output_path=tmp_path / "out" / "page.html")

    html = out.read_text(encoding="utf-8")
    assert '<section id="album-list" class="active">' in html
    assert '<section id="post-list">' in html
    assert html.count('class="user-card"') == 2
    assert html.count('class="album-card"') == 2


async def test_json_payload_tracks_lazy_comments(controller):
    await controller.bootstrap()
    await controller.dispatch(Action.LOAD_POSTS, "user-1")
    await controller.dispatch(Action.TOGGLE_COMMENTS, "post-12")

    payload = document_payload(controller)

    assert [u["username"] for u in payload["user-list"]] == ["Bret", "Antonette"]
    assert payload["user-list"][0]["company"]["catchPhrase"].startswith("Multi-layered")
    posts = {p["id"]: p for p in payload["post-list"]}
    assert posts[11]["comments"] is None
    assert posts[12]["comments"] == []
    assert payload["album-list"] == []
    assert payload["active_section"] == "post-list"
    assert payload["expanded_posts"] == ["post-12"]


async def test_export_json_is_stable(controller, tmp_path):
    await controller.bootstrap()

    out = export_document_json(controller=controller, output_path=tmp_path / "doc.json")

    text = out.read_text(encoding="utf-8")
    assert text.endswith("\n")
    data = json.loads(text)
    assert list(data) == sorted(data)
    assert data["active_section"] is None
