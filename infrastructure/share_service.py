"""Desktop sharing: export a picture to a folder and open it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any

from loguru import logger

from core.models import PictureRecord
from core.services.interfaces import ISharePicture
from infrastructure.logging import open_file_in_default_app

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@dataclass
class ShareContext:
    """Where shared pictures are exported to."""

    export_dir: Path


def safe_file_stem(name: str) -> str:
    """Reduce `name` to characters that are safe in a file name."""
    stem = _UNSAFE_CHARS.sub("_", name).strip("._")
    return stem or "picture"


class DesktopSharePicture(ISharePicture):
    """Writes the full image of a picture to disk and hands it to `opener`."""

    def __init__(
        self, provider: Any, opener: Callable[[str], bool] = open_file_in_default_app
    ) -> None:
        self._provider = provider
        self._opener = opener

    def share(self, context: ShareContext, picture: PictureRecord) -> Path:
        """Export `picture` into `context.export_dir` and return the written path."""
        image = self._provider.get_image(picture)
        export_dir = Path(context.export_dir)
        export_dir.mkdir(parents=True, exist_ok=True)
        suffix = ".png" if image.startswith(_PNG_MAGIC) else ".jpg"
        target = export_dir / f"{safe_file_stem(picture.name)}_{picture.picture_id[:8]}{suffix}"
        target.write_bytes(image)
        logger.info("Shared picture {} as {}", picture.picture_id, target)
        if not self._opener(str(target)):
            logger.warning("No application opened shared picture {}", target)
        return target
