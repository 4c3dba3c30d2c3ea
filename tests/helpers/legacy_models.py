"""SQLAlchemy models with one-sided or unconventional associations.

Each pair below breaks exactly one mirror rule:

- ``Author.posts`` (has_many): `Post` has the ``author_id`` column but no
  ``author`` relationship.
- ``Comment.post`` (belongs_to): `Post` declares nothing pointing back at
  ``comments``.
- ``Article.labels`` (many-to-many): `Label` does not declare ``articles``.
- ``Team.members`` / ``Member.group``: mirrored, but under ``group`` rather
  than the conventional ``team``.
- ``Ticket.owner``: overrides its foreign key to a field that does not exist.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# pylint: disable=too-few-public-methods


class LegacyBase(DeclarativeBase):
    """Declarative base (and registry) of the legacy schema."""


class Author(LegacyBase):
    """Author declaring a has_many that Post never mirrors."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(80))

    posts: Mapped[list[Post]] = relationship()


class Post(LegacyBase):
    """Post without any relationship of its own."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"))
    title: Mapped[str] = mapped_column(String(200))


class Comment(LegacyBase):
    """Comment whose parent does not point back at ``comments``."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"))
    body: Mapped[str | None] = mapped_column(String(500))

    post: Mapped[Post] = relationship()


article_labels = Table(
    "article_labels",
    LegacyBase.metadata,
    Column("article_id", ForeignKey("articles.id"), primary_key=True),
    Column("label_id", ForeignKey("labels.id"), primary_key=True),
)


class Article(LegacyBase):
    """Article with a one-sided many-to-many."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True)

    labels: Mapped[list[Label]] = relationship(secondary=article_labels)


class Label(LegacyBase):
    """Label unaware of articles."""

    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(primary_key=True)
    text: Mapped[str] = mapped_column(String(40))


class Team(LegacyBase):
    """Team whose members point back under an unconventional name."""

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)

    members: Mapped[list[Member]] = relationship(back_populates="group")
    tickets: Mapped[list[Ticket]] = relationship(back_populates="owner")


class Member(LegacyBase):
    """Member of a team, mirrored as ``group``."""

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))

    group: Mapped[Team] = relationship(back_populates="members")


class Ticket(LegacyBase):
    """Ticket whose relationship overrides the foreign key name."""

    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))

    owner: Mapped[Team] = relationship(
        back_populates="tickets", info={"foreign_key": "owner_ref"}
    )
