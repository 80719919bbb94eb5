"""Unified picture access over bundled resources, local storage and the network.

`ImageProvider` resolves image and thumbnail bytes for every picture variant
and applies edit/delete/save mutations to the shared picture list and the
storage collaborator.
"""

from __future__ import annotations

from typing import assert_never

from loguru import logger

from app.viewmodels.picture_list import PictureList
from core.models import (
    BundledPicture,
    CapturedPicture,
    PictureRecord,
    RemotePicture,
    with_metadata,
)
from core.services.interfaces import IImageStorage
from infrastructure.catalog_client import RemoteCatalogClient
from infrastructure.resources import BundledResources


class ImageProvider:
    """Single entry point for reading and mutating gallery pictures."""

    def __init__(
        self,
        pictures: PictureList,
        storage: IImageStorage,
        resources: BundledResources,
        remote: RemoteCatalogClient,
    ) -> None:
        self._pictures = pictures
        self._storage = storage
        self._resources = resources
        self._remote = remote

    def get_image(self, picture: PictureRecord) -> bytes:
        """Return full image bytes of `picture`.

        Remote pictures are downloaded on every call; `NetworkError`
        propagates to the caller.
        """
        match picture:
            case BundledPicture():
                return self._resources.read_bytes(picture.resource_id)
            case CapturedPicture():
                return self._storage.get_image(picture)
            case RemotePicture():
                return self._remote.fetch_image(picture.image_url)
            case _:
                assert_never(picture)

    def get_thumbnail(self, picture: PictureRecord) -> bytes:
        """Return thumbnail bytes of `picture`.

        The catalog has no thumbnail endpoint, so remote pictures use the full image.
        """
        match picture:
            case BundledPicture():
                return self._resources.read_bytes(picture.thumbnail_resource_id)
            case CapturedPicture():
                return self._storage.get_thumbnail(picture)
            case RemotePicture():
                return self._remote.fetch_image(picture.image_url)
            case _:
                assert_never(picture)

    def save_image(self, picture: CapturedPicture, image: bytes) -> None:
        """Persist a new capture. The caller adds `picture` to the list."""
        self._storage.save_image(picture, image)

    def delete(self, picture: PictureRecord) -> None:
        """Remove `picture` from the list, and from storage when it is a capture.

        Deleting a picture that is not in the list does nothing.
        """
        if not self._pictures.remove(picture):
            logger.debug("Delete ignored, picture not in list: {}", picture.picture_id)
            return
        match picture:
            case CapturedPicture():
                self._storage.delete(picture)
            case BundledPicture() | RemotePicture():
                pass
            case _:
                assert_never(picture)
        logger.info("Deleted picture {} ({})", picture.name, picture.picture_id)

    def edit(self, picture: PictureRecord, name: str, description: str) -> PictureRecord:
        """Replace `picture` in the list with a copy carrying `name` and `description`.

        Captures are rewritten in storage before the list changes, so a
        failing rewrite leaves the list untouched.

        Raises:
            PictureNotFoundError: `picture` is not in the list. Callers must
                only edit pictures currently shown.
        """
        self._pictures.index_of(picture)
        edited = with_metadata(picture, name, description)
        match edited:
            case CapturedPicture():
                self._storage.rewrite(edited)
            case BundledPicture() | RemotePicture():
                pass
            case _:
                assert_never(edited)
        self._pictures.replace(picture, edited)
        logger.info("Edited picture {} -> {!r}", picture.picture_id, name)
        return edited
