# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request model for the follow / unfollow endpoint."""

from typing import Optional

from pydantic import BaseModel


class FollowRequest(BaseModel):
    status: Optional[str] = None  # "follow" or "unfollow"
