# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Local-filesystem store for uploaded vacation images.

Uploads are written in two phases so that a failed database write never
leaves a published file behind:

1. ``stage()``   – copy the upload into ``.<image_dir name>-staging``, a
                   sibling of ``<image_dir>`` outside the static mount,
                   under a collision-resistant name (uuid4 hex + original
                   extension).
2. ``commit()``  – after the DB row is committed, move the staged file into
                   ``<image_dir>``.  ``discard()`` deletes it instead.

Files in ``<image_dir>`` are served read-only by the static mount in
``main.py``.
"""

import os
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from core.config import settings
from core.logger import logger


class StagedImage:
    """A file sitting in the staging area, waiting for its DB row."""

    def __init__(self, filename: str, staged_path: Path, final_path: Path):
        self.filename = filename
        self._staged_path = staged_path
        self._final_path = final_path

    def commit(self) -> None:
        # os.replace is atomic as staging and final dir share a filesystem
        os.replace(self._staged_path, self._final_path)

    def discard(self) -> None:
        self._staged_path.unlink(missing_ok=True)


class ImageStore:
    def __init__(self, directory: str):
        self.directory = Path(directory)
        # Sibling of the served directory: same filesystem for os.replace,
        # but never reachable through the static mount
        self.staging_dir = self.directory.parent / f".{self.directory.name}-staging"
        self.directory.mkdir(parents=True, exist_ok=True)
        self.staging_dir.mkdir(parents=True, exist_ok=True)

    def stage(self, upload: UploadFile) -> StagedImage:
        """Copy *upload* into the staging area and return the handle."""
        ext = Path(upload.filename or "").suffix.lower()
        filename = f"{uuid.uuid4().hex}{ext}"
        staged_path = self.staging_dir / filename

        upload.file.seek(0)
        with open(staged_path, "wb") as out:
            shutil.copyfileobj(upload.file, out)

        return StagedImage(filename, staged_path, self.directory / filename)

    def path_of(self, filename: str) -> Path:
        return self.directory / filename

    def remove(self, filename: Optional[str]) -> None:
        """Delete a published image.  A missing file is not an error."""
        if not filename:
            return
        try:
            self.path_of(filename).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove image %s", filename, exc_info=True)


# Module-level store backing both the upload handlers and the static mount
image_store = ImageStore(settings.image_dir)


def get_image_store() -> ImageStore:
    """FastAPI dependency.  Override in tests to point at another directory."""
    return image_store
