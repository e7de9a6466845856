# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Vacation endpoints – create, update, list, lookup and soft delete.

Invariants enforced by every handler
------------------------------------
* Vacations are never removed from the table.  DELETE flips ``status`` to 0
  and the list endpoint hides such rows unless ``include_inactive`` is set.
* The by-id lookup returns soft-deleted rows by default; pass
  ``include_inactive=false`` to get the list endpoint's visibility instead.
* Images are staged before the DB write and published only after the
  commit succeeds.  A failed commit discards the staged file; a replaced
  image is removed once the new row is committed.
"""

from collections import defaultdict
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from core.exceptions import InternalError, NotFoundError, ValidationError, envelope
from core.logger import logger
from core.media import ImageStore, StagedImage, get_image_store
from models.follower import FOLLOW, Follower
from models.vacation import STATUS_ACTIVE, STATUS_DELETED, Vacation
from vacations.schemas import VacationRow, VacationWithFollowers
from vacations.validation import validate_vacation_form

router = APIRouter(tags=["vacations"])


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def _commit_with_image(db: Session, staged: Optional[StagedImage], action: str) -> None:
    """
    Commit the session, then publish *staged*.  On a DB failure the staged
    file is discarded so no orphan is left in the image directory.
    """
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        if staged is not None:
            staged.discard()
        raise InternalError(f"Error {action} vacation") from exc

    if staged is not None:
        try:
            staged.commit()
        except OSError as exc:
            raise InternalError(f"Error storing image for {action} vacation") from exc


# ---------------------------------------------------------------------------
# POST /vacations  – create
# ---------------------------------------------------------------------------


@router.post("/vacations")
def create_vacation(
    destination: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    start_date: Optional[str] = Form(None),
    end_date: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    """Validate the form, store the image and insert an active vacation."""
    data = validate_vacation_form(
        destination, description, start_date, end_date, price, require_future=True
    )
    if not _has_file(image):
        raise ValidationError("image is required")

    try:
        staged = store.stage(image)
    except OSError as exc:
        raise InternalError("Error saving uploaded image") from exc

    vacation = Vacation(**data.model_dump(), image=staged.filename, status=STATUS_ACTIVE)
    db.add(vacation)
    _commit_with_image(db, staged, "creating")
    db.refresh(vacation)

    logger.info("Created vacation id=%s destination=%s", vacation.id, vacation.destination)
    return envelope(
        200,
        "Vacation created successfully",
        vacation=VacationRow.model_validate(vacation).model_dump(mode="json"),
    )


# ---------------------------------------------------------------------------
# PUT /update-vacations/{id}  – update fields, optionally replace the image
# ---------------------------------------------------------------------------


@router.put("/update-vacations/{vacation_id}")
def update_vacation(
    vacation_id: int,
    destination: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    start_date: Optional[str] = Form(None),
    end_date: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    """
    Overwrite every field of the vacation.  Dates only need to be ordered;
    they may lie in the past since this edits existing data.
    """
    data = validate_vacation_form(
        destination, description, start_date, end_date, price, require_future=False
    )

    vacation = db.query(Vacation).filter(Vacation.id == vacation_id).first()
    if not vacation:
        raise NotFoundError("Vacation not found")

    staged = None
    old_image = None
    if _has_file(image):
        try:
            staged = store.stage(image)
        except OSError as exc:
            raise InternalError("Error saving uploaded image") from exc
        old_image = vacation.image
        vacation.image = staged.filename

    for field, value in data.model_dump().items():
        setattr(vacation, field, value)

    _commit_with_image(db, staged, "updating")
    if old_image and old_image != vacation.image:
        store.remove(old_image)
    db.refresh(vacation)

    logger.info("Updated vacation id=%s image_replaced=%s", vacation.id, staged is not None)
    return envelope(
        200,
        "Vacation updated successfully",
        vacation=VacationRow.model_validate(vacation).model_dump(mode="json"),
    )


# ---------------------------------------------------------------------------
# GET /vacations-list  – active vacations with their followers
# ---------------------------------------------------------------------------


@router.get("/vacations-list")
def list_vacations(include_inactive: bool = False, db: Session = Depends(get_db)):
    """
    Return vacations ordered by id, each with ``followersCount`` and
    ``followersArray`` (ids of users whose status is "follow").

    Followers are fetched in one batch for all listed vacations and joined
    here, rather than issuing two queries per vacation.
    """
    query = db.query(Vacation)
    if not include_inactive:
        query = query.filter(Vacation.status == STATUS_ACTIVE)
    vacations = query.order_by(Vacation.id.asc()).all()

    followers: dict[int, list[int]] = defaultdict(list)
    ids = [v.id for v in vacations]
    if ids:
        rows = (
            db.query(Follower.vacation_id, Follower.user_id)
            .filter(Follower.status == FOLLOW, Follower.vacation_id.in_(ids))
            .order_by(Follower.vacation_id, Follower.user_id)
            .all()
        )
        for vacation_id, user_id in rows:
            followers[vacation_id].append(user_id)

    result = []
    for vacation in vacations:
        row = VacationWithFollowers.model_validate(vacation)
        row.followersArray = followers.get(vacation.id, [])
        row.followersCount = len(row.followersArray)
        result.append(row.model_dump(mode="json"))

    return envelope(200, "Vacations retrieved successfully", vacations=result)


# ---------------------------------------------------------------------------
# GET /vacations-by-id/{id}
# ---------------------------------------------------------------------------


@router.get("/vacations-by-id/{vacation_id}")
def get_vacation(vacation_id: int, include_inactive: bool = True, db: Session = Depends(get_db)):
    """Return one vacation.  Soft-deleted rows are included unless told otherwise."""
    query = db.query(Vacation).filter(Vacation.id == vacation_id)
    if not include_inactive:
        query = query.filter(Vacation.status == STATUS_ACTIVE)
    vacation = query.first()
    if not vacation:
        raise NotFoundError("Vacation not found")

    return envelope(
        200,
        "Vacation retrieved successfully",
        vacation=VacationRow.model_validate(vacation).model_dump(mode="json"),
    )


# ---------------------------------------------------------------------------
# DELETE /delete-vacations/{id}  – soft delete
# ---------------------------------------------------------------------------


@router.delete("/delete-vacations/{vacation_id}")
def delete_vacation(vacation_id: int, db: Session = Depends(get_db)):
    """
    Flip the status flag to 0.  The image file and follower rows are left
    in place.
    """
    matched = (
        db.query(Vacation)
        .filter(Vacation.id == vacation_id)
        .update({Vacation.status: STATUS_DELETED}, synchronize_session=False)
    )
    if not matched:
        db.rollback()
        raise NotFoundError("Vacation not found")
    db.commit()

    logger.info("Soft-deleted vacation id=%s", vacation_id)
    return envelope(200, "Vacation deleted successfully")
