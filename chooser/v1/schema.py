# relational schema for the v1 store
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..db import utcnow


class Base(DeclarativeBase):
    pass


class Template(Base):
    """
    Catalog entry; `template_data` is an opaque JSON document.
    """

    __tablename__ = "chooser_templates"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    template_data: Mapped[Any] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class Instance(Base):
    """
    One chooser session. `id` is public, `admin_id` is the secret capability.
    """

    __tablename__ = "chooser_instances"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    admin_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    # snapshot of the template at creation time
    template_data: Mapped[Any] = mapped_column(JSON, nullable=False)
    selection_labels: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    viewed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_instances_created", "published", "created_at"),
        Index("idx_instances_viewed", "viewed_at"),
    )


class Option(Base):
    __tablename__ = "chooser_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chooser_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("chooser_instances.id", ondelete="CASCADE"),
        nullable=False,
    )
    value: Mapped[str] = mapped_column("option_value", Text, nullable=False)
    order: Mapped[int] = mapped_column("option_order", Integer, nullable=False)
    # `metadata` is reserved on declarative classes
    meta: Mapped[Optional[Any]] = mapped_column("metadata", JSON, nullable=True)

    __table_args__ = (
        Index("idx_options_chooser", "chooser_id"),
        # ids are handed to participants, never reuse them
        {"sqlite_autoincrement": True},
    )


class Selection(Base):
    __tablename__ = "participant_selections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chooser_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("chooser_instances.id", ondelete="CASCADE"),
        nullable=False,
    )
    option_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("chooser_options.id", ondelete="CASCADE"),
        nullable=False,
    )
    participant_name: Mapped[str] = mapped_column(Text, nullable=False)
    selection_value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_selections_chooser", "chooser_id"),
        UniqueConstraint(
            "chooser_id",
            "option_id",
            "participant_name",
            name="idx_unique_participant_option",
        ),
        {"sqlite_autoincrement": True},
    )
