# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic response models for the vacation endpoints."""

from datetime import date
from typing import List

from pydantic import BaseModel


class VacationRow(BaseModel):
    id: int
    destination: str
    description: str
    start_date: date
    end_date: date
    price: float
    image: str       # file name; served at <image_url_path>/<image>
    status: int      # 1 = active, 0 = soft-deleted

    model_config = {"from_attributes": True}


class VacationWithFollowers(VacationRow):
    followersCount: int = 0
    followersArray: List[int] = []


# -- Validated form input ---------------------------------------------------
# Produced by vacations.validation from the raw multipart strings.


class VacationInput(BaseModel):
    destination: str
    description: str
    start_date: date
    end_date: date
    price: float
