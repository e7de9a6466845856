# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Follow / unfollow endpoint.

The relation holds at most one row per (user_id, vacation_id).  A request
updates the status of the existing row or inserts a new one; "unfollow" is
a status value, never a row deletion.  Following twice is two updates with
the same result.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from core.exceptions import InternalError, ValidationError, envelope
from core.logger import logger
from models.follower import VALID_STATUSES, Follower
from followers.schemas import FollowRequest

router = APIRouter(tags=["followers"])


def _find(db: Session, user_id: int, vacation_id: int) -> Optional[Follower]:
    return (
        db.query(Follower)
        .filter(Follower.user_id == user_id, Follower.vacation_id == vacation_id)
        .first()
    )


# ---------------------------------------------------------------------------
# POST /followers?user_id=&vacation_id=
# ---------------------------------------------------------------------------


@router.post("/followers")
def set_follow_status(
    body: Optional[FollowRequest] = None,
    user_id: Optional[int] = None,
    vacation_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """Upsert the follow status for a (user, vacation) pair."""
    if user_id is None or vacation_id is None:
        raise ValidationError("user_id and vacation_id are required")
    status = body.status if body else None
    if not status:
        raise ValidationError("status is required")
    if status not in VALID_STATUSES:
        raise ValidationError("status must be 'follow' or 'unfollow'")

    existing = _find(db, user_id, vacation_id)
    if existing:
        existing.status = status
        db.commit()
        logger.info("Follower user=%s vacation=%s -> %s (updated)", user_id, vacation_id, status)
        return envelope(200, "Follower status updated successfully")

    db.add(Follower(user_id=user_id, vacation_id=vacation_id, status=status))
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent request inserted the pair first; fall back to update
        db.rollback()
        existing = _find(db, user_id, vacation_id)
        if existing is None:
            raise InternalError("Error storing follower") from exc
        existing.status = status
        db.commit()
        logger.info("Follower user=%s vacation=%s -> %s (updated after race)", user_id, vacation_id, status)
        return envelope(200, "Follower status updated successfully")

    logger.info("Follower user=%s vacation=%s -> %s (stored)", user_id, vacation_id, status)
    return envelope(200, "Follower stored successfully")
