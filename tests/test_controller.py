"""Tests for the interaction controller (lazy comment toggle, sections)."""

import asyncio

import pytest

from core.domain.models import Post, User
from core.domain.view_state import Action, CommentsState, Section
from core.errors import UnboundActionError, UnknownNodeError
from core.services.controller import InteractionController


class GatedAPI:
    """Delegates to a real client but holds comment fetches until released."""

    def __init__(self, api) -> None:
        self._api = api
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.comment_fetches = 0

    async def fetch_users(self):
        return await self._api.fetch_users()

    async def fetch_user_posts(self, user_id):
        return await self._api.fetch_user_posts(user_id)

    async def fetch_user_albums(self, user_id):
        return await self._api.fetch_user_albums(user_id)

    async def fetch_post_comments(self, post_id):
        self.comment_fetches += 1
        self.started.set()
        await self.release.wait()
        return await self._api.fetch_post_comments(post_id)


async def _posts_loaded(controller, user_id: int = 1) -> None:
    await controller.bootstrap()
    await controller.dispatch(Action.LOAD_POSTS, controller.find_node(User, user_id))


def _comment_bodies(controller, post_node: str) -> list[str]:
    return [line.html for line in controller.comment_lines(post_node)]


class TestBootstrap:
    async def test_one_card_per_user_in_order(self, controller):
        assert await controller.bootstrap()

        assert controller.document.users.node_ids() == ["user-1", "user-2"]
        assert controller.record("user-2", User).username == "Antonette"

    async def test_failure_renders_nothing(self, controller, server):
        server.failing.add("/users")

        assert await controller.bootstrap() is False
        assert len(controller.document.users) == 0
        assert controller.view_model == {}


class TestSections:
    async def test_load_posts_activates_post_section(self, controller):
        await _posts_loaded(controller)

        assert controller.document.posts.node_ids() == ["post-11", "post-12"]
        assert controller.document.active_section is Section.POSTS
        assert set(controller.post_views) == {"post-11", "post-12"}

    async def test_switching_to_albums_deactivates_posts(self, controller):
        await _posts_loaded(controller)

        await controller.dispatch(Action.LOAD_ALBUMS, "user-1")

        assert controller.document.albums.active
        assert not controller.document.posts.active
        assert controller.document.active_section is Section.ALBUMS
        assert controller.document.albums.node_ids() == ["album-101", "album-102"]

    async def test_reloading_posts_drops_previous_records(self, controller):
        await _posts_loaded(controller, 1)
        await controller.dispatch(Action.LOAD_POSTS, "user-2")

        assert controller.document.posts.node_ids() == ["post-21"]
        assert "post-11" not in controller.view_model
        assert set(controller.post_views) == {"post-21"}

    async def test_failed_load_keeps_previous_view(self, controller, server):
        await _posts_loaded(controller)
        server.failing.add("/users/1/albums")

        assert await controller.dispatch(Action.LOAD_ALBUMS, "user-1") is False

        assert controller.document.active_section is Section.POSTS
        assert controller.document.posts.node_ids() == ["post-11", "post-12"]


class TestCommentToggle:
    async def test_first_open_fetches_once(self, controller, server):
        await _posts_loaded(controller)

        state = await controller.dispatch(Action.TOGGLE_COMMENTS, "post-11")

        assert state is CommentsState.EXPANDED
        assert server.count("/posts/11/comments") == 1
        assert controller.record("post-11", Post).has_comments

    async def test_reopen_uses_cache(self, controller, server):
        await _posts_loaded(controller)

        await controller.toggle_comments("post-11")
        first = _comment_bodies(controller, "post-11")
        assert await controller.toggle_comments("post-11") is CommentsState.COLLAPSED
        assert controller.comment_lines("post-11") == []
        await controller.toggle_comments("post-11")
        second = _comment_bodies(controller, "post-11")

        assert server.count("/posts/11/comments") == 1
        assert first == second
        assert len(controller.record("post-11", Post).comments) == 3

    async def test_comments_render_in_reverse_arrival_order(self, controller):
        await _posts_loaded(controller)

        await controller.toggle_comments("post-11")

        bodies = _comment_bodies(controller, "post-11")
        assert "third comment" in bodies[0]
        assert "second comment" in bodies[1]
        assert "first comment" in bodies[2]
        html = controller.document.posts.find("post-11").html
        assert html.index("third comment") < html.index("first comment")

    async def test_zero_comments_still_flips_label(self, controller):
        await _posts_loaded(controller)

        state = await controller.toggle_comments("post-12")

        assert state is CommentsState.EXPANDED
        assert controller.comment_lines("post-12") == []
        html = controller.document.posts.find("post-12").html
        assert '<span class="verb">hide</span> 0 comments' in html

    async def test_label_follows_state(self, controller):
        await _posts_loaded(controller)

        await controller.toggle_comments("post-11")
        assert '<span class="verb">hide</span>' in controller.document.posts.find("post-11").html
        await controller.toggle_comments("post-11")
        html = controller.document.posts.find("post-11").html
        assert '<span class="verb">show</span> 3 comments' in html
        assert "first comment" not in html

    async def test_failed_fetch_stays_collapsed_and_retries(self, controller, server):
        await _posts_loaded(controller)
        server.failing.add("/posts/11/comments")

        assert await controller.toggle_comments("post-11") is CommentsState.COLLAPSED
        assert not controller.record("post-11", Post).has_comments

        server.failing.clear()
        assert await controller.toggle_comments("post-11") is CommentsState.EXPANDED
        assert server.count("/posts/11/comments") == 2

    async def test_toggle_while_loading_is_ignored(self, api):
        gated = GatedAPI(api)
        controller = InteractionController(gated)
        controller.bind()
        await _posts_loaded(controller)

        first = asyncio.create_task(controller.toggle_comments("post-11"))
        await gated.started.wait()
        assert await controller.toggle_comments("post-11") is CommentsState.COLLAPSED
        gated.release.set()

        assert await first is CommentsState.EXPANDED
        assert gated.comment_fetches == 1

    async def test_other_posts_are_untouched(self, controller):
        await _posts_loaded(controller)

        await controller.toggle_comments("post-11")

        assert controller.post_views["post-12"].state is CommentsState.COLLAPSED
        assert not controller.record("post-12", Post).has_comments


class TestDispatch:
    async def test_unknown_node(self, controller):
        await controller.bootstrap()

        with pytest.raises(UnknownNodeError):
            await controller.dispatch(Action.LOAD_POSTS, "user-99")

    async def test_wrong_record_kind(self, controller):
        await _posts_loaded(controller)

        with pytest.raises(UnknownNodeError):
            await controller.dispatch(Action.LOAD_ALBUMS, "post-11")
        with pytest.raises(UnknownNodeError):
            await controller.dispatch(Action.TOGGLE_COMMENTS, "user-1")

    async def test_unbound_action(self, api):
        controller = InteractionController(api)

        with pytest.raises(UnboundActionError):
            await controller.dispatch(Action.LOAD_POSTS, "user-1")

    async def test_find_node(self, controller):
        await controller.bootstrap()

        assert controller.find_node(User, 2) == "user-2"
        with pytest.raises(UnknownNodeError):
            controller.find_node(Post, 11)

    def test_bind_registers_every_action(self, controller):
        assert all(action in controller.registry for action in Action)
