# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Follower ORM model – the user ↔ vacation follow relation."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from database import Base

FOLLOW = "follow"
UNFOLLOW = "unfollow"
VALID_STATUSES = {FOLLOW, UNFOLLOW}


class Follower(Base):
    __tablename__ = "followers"
    # At most one row per pair; unfollowing flips the status, it never
    # deletes the row.
    __table_args__ = (
        UniqueConstraint("user_id", "vacation_id", name="uq_followers_user_vacation"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No foreign keys: soft-deleted vacations keep their follower rows
    user_id = Column(Integer, nullable=False, index=True)
    vacation_id = Column(Integer, nullable=False, index=True)
    status = Column(String(16), nullable=False)
