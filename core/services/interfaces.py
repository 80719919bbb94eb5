"""Core service interfaces and shared data structures.

This module defines the collaborator contracts the gallery core depends on
(image storage, notification, sharing) and the result type reported by the
one-shot catalog fetch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.models import CapturedPicture, PictureRecord


class CatalogStatus(Enum):
    """Lifecycle of the remote catalog fetch."""

    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class CatalogResult:
    """Outcome of the remote catalog fetch.

    Attributes:
        status: Where the fetch ended up.
        added: Number of remote pictures appended to the list.
        error: Human-readable failure reason, if any.
    """

    status: CatalogStatus
    added: int = 0
    error: str | None = None


class IImageStorage:
    """Interface for persisting camera captures and their thumbnails."""

    def save_image(self, picture: CapturedPicture, image: bytes) -> None:
        """Persist `image` bytes and metadata for `picture`."""
        raise NotImplementedError

    def delete(self, picture: CapturedPicture) -> None:
        """Remove everything stored for `picture`."""
        raise NotImplementedError

    def rewrite(self, picture: CapturedPicture) -> None:
        """Persist updated metadata of `picture`."""
        raise NotImplementedError

    def get_image(self, picture: CapturedPicture) -> bytes:
        """Return full image bytes of `picture`."""
        raise NotImplementedError

    def get_thumbnail(self, picture: CapturedPicture) -> bytes:
        """Return thumbnail bytes of `picture`."""
        raise NotImplementedError


class INotification:
    """Interface for user-facing notifications about pictures."""

    def notify_image_data(self, picture: PictureRecord) -> None:
        """Notify the user about `picture`."""
        raise NotImplementedError


class ISharePicture:
    """Interface for handing a picture to the platform share mechanism."""

    def share(self, context: Any, picture: PictureRecord) -> Any:
        """Share `picture` using the platform `context`."""
        raise NotImplementedError
