"""Interaction controller.

Binds user actions (load posts, load albums, toggle comments) to
fetch + render flows and owns all per-node state:

- `view_model`: node id -> record currently displayed under that node.
- `post_views`: node id -> `PostView` holding the comment toggle state.

Each interaction is a linear async flow. Fetch failures arrive as `None`
and leave the document untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence, TypeVar

from adapters.html_renderer import (
    comment_node_id,
    render_album,
    render_comment,
    render_post,
    render_user,
)
from core.domain.document import Document, Fragment
from core.domain.models import Album, Post, User
from core.domain.view_state import Action, CommentsState, Section
from core.errors import UnboundActionError, UnknownNodeError
from core.interfaces.api import PlaceholderAPI
from core.services.list_renderer import activate, render_list


logger = logging.getLogger("userdeck.controller")

Record = User | Post | Album
RecordT = TypeVar("RecordT", User, Post, Album)
Handler = Callable[[str], Awaitable[object]]


@dataclass
class PostView:
    """Comment state of one displayed post.

    Invariants:
    - `comment_lines` is empty whenever `state` is COLLAPSED.
    - `pending` is True only while a comment fetch for this post is awaited.
    """

    post: Post
    state: CommentsState = CommentsState.COLLAPSED
    comment_lines: list[Fragment] = field(default_factory=list)
    pending: bool = False


class EventRegistry:
    """Explicit action -> handler table."""

    def __init__(self) -> None:
        self._handlers: dict[Action, Handler] = {}

    def on(self, action: Action, handler: Handler) -> None:
        self._handlers[action] = handler

    def handler_for(self, action: Action) -> Handler:
        try:
            return self._handlers[action]
        except KeyError:
            raise UnboundActionError(action) from None

    def __contains__(self, action: object) -> bool:
        return action in self._handlers


class InteractionController:
    def __init__(
        self,
        api: PlaceholderAPI,
        document: Document | None = None,
        registry: EventRegistry | None = None,
    ) -> None:
        self._api = api
        self.document = document or Document()
        self.registry = registry or EventRegistry()
        self.view_model: dict[str, Record] = {}
        self.post_views: dict[str, PostView] = {}

    # -- wiring ----------------------------------------------------------

    def bind(self) -> EventRegistry:
        """Register the handlers for every user action."""

        self.registry.on(Action.LOAD_POSTS, self.load_posts)
        self.registry.on(Action.LOAD_ALBUMS, self.load_albums)
        self.registry.on(Action.TOGGLE_COMMENTS, self.toggle_comments)
        return self.registry

    async def dispatch(self, action: Action, node_id: str) -> object:
        """Run the handler bound to `action` for the node `node_id`."""

        handler = self.registry.handler_for(action)
        logger.debug("Dispatching %s on %s", action.value, node_id)
        return await handler(node_id)

    # -- view-model ------------------------------------------------------

    def record(self, node_id: str, kind: type[RecordT]) -> RecordT:
        """Record displayed under `node_id`, checked against `kind`."""

        record = self.view_model.get(node_id)
        if not isinstance(record, kind):
            raise UnknownNodeError(node_id, kind.__name__)
        return record

    def find_node(self, kind: type[Record], record_id: int) -> str:
        """Node id of the displayed record of `kind` with API id `record_id`."""

        for node_id, record in self.view_model.items():
            if isinstance(record, kind) and record.id == record_id:
                return node_id
        raise UnknownNodeError(f"{kind.__name__.lower()}-{record_id}", kind.__name__)

    def comment_lines(self, post_node: str) -> list[Fragment]:
        return list(self._post_view(post_node).comment_lines)

    def _post_view(self, post_node: str) -> PostView:
        view = self.post_views.get(post_node)
        if view is None:
            raise UnknownNodeError(post_node, Post.__name__)
        return view

    def _show(
        self,
        section: Section,
        records: Sequence[RecordT],
        render: Callable[[RecordT], Fragment],
    ) -> None:
        container = self.document.section(section)
        removed = render_list(records, container, render)
        for fragment in removed:
            self.view_model.pop(fragment.node_id, None)
            self.post_views.pop(fragment.node_id, None)
        for record, fragment in zip(records, container):
            self.view_model[fragment.node_id] = record

    # -- flows -----------------------------------------------------------

    async def bootstrap(self) -> bool:
        """Initial load: fetch every user and render the user list."""

        users = await self._api.fetch_users()
        if users is None:
            logger.warning("User list unavailable; nothing rendered")
            return False
        self._show(Section.USERS, users, render_user)
        logger.info("Rendered %d users", len(users))
        return True

    async def load_posts(self, user_node: str) -> bool:
        user = self.record(user_node, User)
        posts = await self._api.fetch_user_posts(user.id)
        if posts is None:
            return False
        self._show(Section.POSTS, posts, render_post)
        for fragment, post in zip(self.document.posts, posts):
            self.post_views[fragment.node_id] = PostView(post=post)
        activate(self.document, Section.POSTS)
        logger.info("Rendered %d posts by %s", len(posts), user.username)
        return True

    async def load_albums(self, user_node: str) -> bool:
        user = self.record(user_node, User)
        albums = await self._api.fetch_user_albums(user.id)
        if albums is None:
            return False
        self._show(Section.ALBUMS, albums, render_album)
        activate(self.document, Section.ALBUMS)
        logger.info("Rendered %d albums by %s", len(albums), user.username)
        return True

    async def toggle_comments(self, post_node: str) -> CommentsState:
        """Flip a post between COLLAPSED and EXPANDED.

        Comments are fetched only on the first expansion; later expansions
        replay the list attached to the record.
        """

        view = self._post_view(post_node)

        if view.state is CommentsState.EXPANDED:
            view.comment_lines = []
            view.state = view.state.toggled()
            self._refresh_post(post_node, view)
            return view.state

        if view.pending:
            logger.debug("Comments for %s already loading; toggle ignored", post_node)
            return view.state

        post = view.post
        if not post.has_comments:
            view.pending = True
            try:
                comments = await self._api.fetch_post_comments(post.id)
            finally:
                view.pending = False
            if comments is None:
                return view.state
            post.attach_comments(comments)

        lines: list[Fragment] = []
        for index, comment in enumerate(post.comments or []):
            lines.insert(0, render_comment(comment, comment_node_id(post_node, index)))
        view.comment_lines = lines
        view.state = view.state.toggled()
        self._refresh_post(post_node, view)
        return view.state

    def _refresh_post(self, post_node: str, view: PostView) -> None:
        # The post list may have been replaced while a fetch was in flight.
        if self.post_views.get(post_node) is not view:
            return
        self.document.posts.replace(
            render_post(view.post, state=view.state, comment_lines=view.comment_lines)
        )
