"""List rendering and section activation."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from core.domain.document import Container, Document, Fragment
from core.domain.view_state import Section


R = TypeVar("R")


def render_list(
    records: Iterable[R],
    container: Container,
    render: Callable[[R], Fragment],
) -> list[Fragment]:
    """Empty `container`, then append one fragment per record in input order.

    Returns the fragments that were removed, so the caller can drop whatever
    it tracked for them.
    """

    removed = container.clear()
    for record in records:
        container.append(render(record))
    return removed


def activate(document: Document, section: Section) -> None:
    """Make `section` the visible one among the mutually exclusive sections.

    The user list is not exclusive and always stays active.
    """

    for candidate, container in document.containers.items():
        if candidate.exclusive:
            container.active = candidate is section
        else:
            container.active = True
