"""Error taxonomy shared by the gallery core and its adapters."""

from __future__ import annotations


class GalleryError(Exception):
    """Base class for gallery errors."""


class NetworkError(GalleryError):
    """Raised when the catalog or a remote image cannot be fetched."""


class DecodeError(GalleryError):
    """Raised when the catalog response is not the expected JSON envelope."""


class PictureNotFoundError(GalleryError, LookupError):
    """Raised when a picture is expected in the list but is not there."""

    def __init__(self, picture_id: str) -> None:
        super().__init__(f"Picture not in list: {picture_id}")
        self.picture_id = picture_id
