"""Resource model: a shared study document."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from studyhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .rating import Rating
    from .user import User

MIN_SEMESTER = 1
MAX_SEMESTER = 8


class Branch(str, Enum):
    """Institution departments a resource can be filed under."""

    ISE = "ISE"
    CSE = "CSE"
    ECE = "ECE"
    MECH = "MECH"
    CIVIL = "CIVIL"
    EEE = "EEE"
    AIML = "AIML"
    CHEMICAL = "CHEMICAL"

    @classmethod
    def parse(cls, value: Branch | str) -> Branch:
        """Case-insensitive lookup; surrounding whitespace is ignored.

        :raises ValueError: When ``value`` names no branch.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError("Invalid branch provided") from exc


class Resource(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Study resource uploaded by a user.

    Fields
    ------
    title : str
        3 to 255 characters.
    description : str
        10 to 500 characters.
    semester : int
        Between 1 and 8 (check constraint).
    branch : Branch
        Department enum.
    url : str
        Location of the stored file.
    file_size : int | None
        Size in bytes, when the storage backend reports it.
    is_blocked : bool
        Moderation flag. Blocked resources are invisible to every read path.
    owner_id : int | None
        Uploading user. ``ON DELETE CASCADE``; nullable so rows imported
        without an owner still load.
    """

    __tablename__ = "resources"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    branch: Mapped[Branch] = mapped_column(
        SAEnum(Branch, name="enum_branch", create_constraint=True), nullable=False
    )
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    owner_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )

    __table_args__ = (
        CheckConstraint(
            f"semester >= {MIN_SEMESTER} AND semester <= {MAX_SEMESTER}",
            name="semester_range",
        ),
        Index("ix_resources_owner_id", "owner_id"),
        Index("ix_resources_created_at", "created_at"),
        Index("ix_resources_branch_semester", "branch", "semester"),
    )

    owner: Mapped[User | None] = relationship("User", back_populates="resources")
    ratings: Mapped[list[Rating]] = relationship(
        "Rating", back_populates="resource", cascade="all, delete-orphan"
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="resource", cascade="all, delete-orphan"
    )

    @validates("semester")
    def _validate_semester(self, key: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Semester must be an integer.")
        if not MIN_SEMESTER <= value <= MAX_SEMESTER:
            raise ValueError("Semester must be a number between 1 and 8")
        return value

    @validates("branch")
    def _validate_branch(self, key: str, value: Branch | str) -> Branch:
        return Branch.parse(value)
