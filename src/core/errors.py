"""Exceptions raised by the Core.

Fetch failures are not exceptions: the data fetcher logs them and returns
`None`. These classes cover misuse of the interaction layer only.
"""

from __future__ import annotations


class UserdeckError(Exception):
    """Base error for the application."""


class UnknownNodeError(UserdeckError):
    """A node id is not present in the view-model (or holds another record kind)."""

    def __init__(self, node_id: str, expected: str | None = None) -> None:
        self.node_id = node_id
        self.expected = expected
        if expected:
            message = f"No {expected} is displayed under node '{node_id}'"
        else:
            message = f"No record is displayed under node '{node_id}'"
        super().__init__(message)


class UnboundActionError(UserdeckError):
    """An action was dispatched before a handler was registered for it."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"No handler bound for action '{action}'")
