"""In-memory display: fixed sections holding rendered fragments.

Why a document model:
- The Core stays free of any real DOM/browser; exporters and the CLI read
  from this structure.
- Fragments only carry markup and a node id. Records are looked up through
  the controller's view-model, never through the fragment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from core.domain.view_state import Section


@dataclass
class Fragment:
    """One rendered record."""

    node_id: str
    kind: str
    html: str


@dataclass
class Container:
    """A top-level section (`#user-list`, `#post-list`, `#album-list`)."""

    section: Section
    children: list[Fragment] = field(default_factory=list)
    active: bool = False

    @property
    def element_id(self) -> str:
        return self.section.value

    def clear(self) -> list[Fragment]:
        """Remove every child and return the removed fragments."""

        removed = self.children
        self.children = []
        return removed

    def append(self, fragment: Fragment) -> None:
        self.children.append(fragment)

    def replace(self, fragment: Fragment) -> bool:
        """Swap the child with the same node id in place; False if absent."""

        for index, child in enumerate(self.children):
            if child.node_id == fragment.node_id:
                self.children[index] = fragment
                return True
        return False

    def find(self, node_id: str) -> Fragment | None:
        for child in self.children:
            if child.node_id == node_id:
                return child
        return None

    def node_ids(self) -> list[str]:
        return [child.node_id for child in self.children]

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


@dataclass
class Document:
    """The single page: one container per section, users always visible."""

    containers: dict[Section, Container] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for section in Section:
            self.containers.setdefault(section, Container(section=section))
        self.containers[Section.USERS].active = True

    def section(self, section: Section) -> Container:
        return self.containers[section]

    @property
    def users(self) -> Container:
        return self.containers[Section.USERS]

    @property
    def posts(self) -> Container:
        return self.containers[Section.POSTS]

    @property
    def albums(self) -> Container:
        return self.containers[Section.ALBUMS]

    @property
    def active_section(self) -> Section | None:
        """The visible exclusive section (posts or albums), if any."""

        for section, container in self.containers.items():
            if section.exclusive and container.active:
                return section
        return None
