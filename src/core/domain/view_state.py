"""View-state enumerations shared by the controller, renderers and CLI."""

from __future__ import annotations

from enum import Enum


class CommentsState(str, Enum):
    """Per-post comment list state."""

    COLLAPSED = "collapsed"
    EXPANDED = "expanded"

    @property
    def verb(self) -> str:
        """Label shown on the toggle link."""

        return "hide" if self is CommentsState.EXPANDED else "show"

    def toggled(self) -> "CommentsState":
        if self is CommentsState.EXPANDED:
            return CommentsState.COLLAPSED
        return CommentsState.EXPANDED


class Section(str, Enum):
    """Top-level containers of the document (their ids double as DOM ids)."""

    USERS = "user-list"
    POSTS = "post-list"
    ALBUMS = "album-list"

    @property
    def exclusive(self) -> bool:
        """Whether the section competes for the active slot."""

        return self is not Section.USERS


class Action(str, Enum):
    """User actions the controller reacts to."""

    LOAD_POSTS = "load-posts"
    LOAD_ALBUMS = "load-albums"
    TOGGLE_COMMENTS = "toggle-comments"
