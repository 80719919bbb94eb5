"""Core domain models for gallery pictures and remote catalog entries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TypeAlias, assert_never
import uuid

# Placeholders used for pictures coming from the remote catalog
REMOTE_DESCRIPTION = "Description"
REMOTE_DATE = "Date"


def _new_picture_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class GpsPosition:
    """Geographic position where a picture was taken."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BundledPicture:
    """A sample picture shipped with the application resources."""

    resource_id: str
    thumbnail_resource_id: str
    name: str
    description: str
    gps: GpsPosition
    date_string: str
    picture_id: str = field(default_factory=_new_picture_id)


@dataclass(frozen=True)
class CapturedPicture:
    """A camera capture whose bytes live in the image storage."""

    storage_key: str
    name: str
    description: str
    gps: GpsPosition
    date_string: str
    picture_id: str = field(default_factory=_new_picture_id)


@dataclass(frozen=True)
class RemotePicture:
    """A picture fetched on demand from `image_url`."""

    image_url: str
    name: str
    description: str
    gps: GpsPosition
    date_string: str
    picture_id: str = field(default_factory=_new_picture_id)


PictureRecord: TypeAlias = BundledPicture | CapturedPicture | RemotePicture


@dataclass(frozen=True)
class RemoteCatalogEntry:
    """Raw card record decoded from the catalog response."""

    id: str
    name: str
    image_url: str


def with_metadata(picture: PictureRecord, name: str, description: str) -> PictureRecord:
    """Return a copy of `picture` with new name/description, keeping id and source."""
    return replace(picture, name=name, description=description)


def picture_source(picture: PictureRecord) -> str:
    """Return the variant tag of `picture`."""
    match picture:
        case BundledPicture():
            return "bundled"
        case CapturedPicture():
            return "captured"
        case RemotePicture():
            return "remote"
        case _:
            assert_never(picture)
