"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- The API speaks camelCase; aliases let the records keep snake_case names.

Note:
- These models describe *what* the records are, not *how* they are fetched.
- Records are read-only mirrors of the API, with one exception: a `Post`
  gets its `comments` attached lazily, exactly once.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Company(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Company name.")
    catch_phrase: str = Field(
        default="",
        alias="catchPhrase",
        description="Company creed, shown on the user card.",
    )
    bs: str = Field(default="", description="What the company will do.")


class User(BaseModel):
    """A user as returned by `GET /users`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int = Field(..., description="API identifier.")
    name: str = Field(..., description="Display name.")
    username: str = Field(..., description="Handle used on the card buttons.")
    email: str = Field(default="", description="Contact address.")
    company: Company = Field(..., description="Employer details.")


class Comment(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    body: str = Field(..., description="Comment text.")
    email: str = Field(default="", description="Author address.")
    id: int | None = Field(default=None)
    post_id: int | None = Field(default=None, alias="postId")
    name: str | None = Field(default=None)


class Post(BaseModel):
    """A post with its author expanded (`_expand=user`).

    `comments` stays `None` until the first toggle fetches them; an empty
    list means "fetched, none exist".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int = Field(..., description="API identifier.")
    title: str = Field(default="", description="Post title (rendered as-is).")
    body: str = Field(default="", description="Post body (rendered as-is).")
    user_id: int | None = Field(default=None, alias="userId")
    user: User | None = Field(default=None, description="Embedded author.")
    comments: list[Comment] | None = Field(
        default=None,
        description="Lazily attached comments (absent until first fetched).",
    )

    @property
    def has_comments(self) -> bool:
        """True once comments were attached (even if there are none)."""

        return self.comments is not None

    def attach_comments(self, comments: list[Comment]) -> None:
        """Attach fetched comments; a second attach is ignored."""

        if self.comments is None:
            self.comments = list(comments)


class Photo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str = Field(..., description="Full-size image URL.")
    thumbnail_url: str = Field(..., alias="thumbnailUrl")
    title: str = Field(default="")
    id: int | None = Field(default=None)
    album_id: int | None = Field(default=None, alias="albumId")


class Album(BaseModel):
    """An album with author expanded and photos embedded."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int = Field(..., description="API identifier.")
    title: str = Field(default="")
    user_id: int | None = Field(default=None, alias="userId")
    user: User | None = Field(default=None)
    photos: list[Photo] = Field(default_factory=list)


def author_username(record: Post | Album) -> str:
    """Username of the embedded author, or an empty string when not expanded."""

    return record.user.username if record.user is not None else ""
