"""File-system storage for camera captures.

Each capture is stored under the storage directory as three files keyed by
`CapturedPicture.storage_key`: the original bytes (`<key>.img`), a JPEG
thumbnail generated with Pillow (`<key>_thumb.jpg`) and a metadata JSON
document (`<key>.json`).
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps
from loguru import logger

from core.models import CapturedPicture, GpsPosition
from core.services.interfaces import IImageStorage
from infrastructure.settings import DEFAULT_THUMBNAIL_SIDE


def _ensure_dir(p: Path) -> None:
    """Create directory `p` if missing (including parents)."""
    p.mkdir(parents=True, exist_ok=True)


def make_thumbnail(image: bytes, side: int) -> bytes:
    """Return JPEG bytes of `image` scaled to fit a `side` x `side` box.

    Raises OSError when Pillow cannot decode `image`.
    """
    with Image.open(io.BytesIO(image)) as im:
        try:
            im = ImageOps.exif_transpose(im)
        except (OSError, ValueError, AttributeError):
            pass
        im.thumbnail((side, side), Image.Resampling.LANCZOS)
        if im.mode not in ("RGB", "L"):
            im = im.convert("RGB")
        buffer = io.BytesIO()
        im.save(buffer, format="JPEG", quality=85)
        return buffer.getvalue()


class FileImageStorage(IImageStorage):
    """Stores capture bytes, thumbnails and metadata in a directory."""

    def __init__(self, storage_dir: str | Path, thumbnail_side: int = DEFAULT_THUMBNAIL_SIDE) -> None:
        self._dir = Path(storage_dir)
        self._side = max(1, int(thumbnail_side or DEFAULT_THUMBNAIL_SIDE))
        _ensure_dir(self._dir)

    def _path_in_store(self, file_name: str) -> Path:
        """Return `file_name` inside the storage dir, refusing paths that leave it."""
        path = (self._dir / file_name).resolve()
        if path.parent != self._dir.resolve():
            raise ValueError(f"Storage key outside storage dir: {file_name}")
        return path

    def _image_path(self, picture: CapturedPicture) -> Path:
        return self._path_in_store(f"{picture.storage_key}.img")

    def _thumb_path(self, picture: CapturedPicture) -> Path:
        return self._path_in_store(f"{picture.storage_key}_thumb.jpg")

    def _meta_path(self, picture: CapturedPicture) -> Path:
        return self._path_in_store(f"{picture.storage_key}.json")

    def save_image(self, picture: CapturedPicture, image: bytes) -> None:
        """Write original bytes, thumbnail and metadata for `picture`."""
        self._image_path(picture).write_bytes(image)
        try:
            thumb = make_thumbnail(image, self._side)
        except (OSError, ValueError) as ex:
            # Undecodable input: the original doubles as its own thumbnail
            logger.warning("Thumbnail generation failed for {}: {}", picture.storage_key, ex)
            thumb = image
        self._thumb_path(picture).write_bytes(thumb)
        self._write_metadata(picture)
        logger.info("Saved capture {} ({} bytes)", picture.storage_key, len(image))

    def delete(self, picture: CapturedPicture) -> None:
        """Remove every file stored for `picture`; already missing files are skipped."""
        for path in (self._image_path(picture), self._thumb_path(picture), self._meta_path(picture)):
            try:
                path.unlink()
            except FileNotFoundError:
                logger.debug("Delete skipped, file already gone: {}", path)
        logger.info("Deleted capture {}", picture.storage_key)

    def rewrite(self, picture: CapturedPicture) -> None:
        """Rewrite the metadata document of `picture`."""
        self._write_metadata(picture)
        logger.info("Rewrote metadata of capture {}", picture.storage_key)

    def get_image(self, picture: CapturedPicture) -> bytes:
        return self._image_path(picture).read_bytes()

    def get_thumbnail(self, picture: CapturedPicture) -> bytes:
        return self._thumb_path(picture).read_bytes()

    def list_pictures(self) -> list[CapturedPicture]:
        """Rebuild stored captures from their metadata, ordered by storage key."""
        pictures: list[CapturedPicture] = []
        for meta in sorted(self._dir.glob("*.json")):
            try:
                data: dict[str, Any] = json.loads(meta.read_text(encoding="utf-8"))
                gps = data.get("gps") or {}
                pictures.append(
                    CapturedPicture(
                        storage_key=meta.stem,
                        name=str(data.get("name", "")),
                        description=str(data.get("description", "")),
                        gps=GpsPosition(
                            float(gps.get("latitude", 0.0)), float(gps.get("longitude", 0.0))
                        ),
                        date_string=str(data.get("date_string", "")),
                        picture_id=str(data.get("picture_id") or meta.stem),
                    )
                )
            except (OSError, ValueError, TypeError, AttributeError) as ex:
                logger.error("Invalid capture metadata {}: {}", meta, ex)
                continue
        return pictures

    def _write_metadata(self, picture: CapturedPicture) -> None:
        data = {
            "picture_id": picture.picture_id,
            "name": picture.name,
            "description": picture.description,
            "gps": {"latitude": picture.gps.latitude, "longitude": picture.gps.longitude},
            "date_string": picture.date_string,
        }
        self._meta_path(picture).write_text(json.dumps(data, indent=2), encoding="utf-8")
