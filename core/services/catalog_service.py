"""Mapping of remote catalog entries into gallery pictures."""

from __future__ import annotations

from collections.abc import Iterable

from core.models import (
    REMOTE_DATE,
    REMOTE_DESCRIPTION,
    GpsPosition,
    RemoteCatalogEntry,
    RemotePicture,
)


def to_remote_picture(entry: RemoteCatalogEntry) -> RemotePicture:
    """Build a `RemotePicture` with placeholder description, date and position."""
    return RemotePicture(
        image_url=entry.image_url,
        name=entry.name,
        description=REMOTE_DESCRIPTION,
        gps=GpsPosition(0.0, 0.0),
        date_string=REMOTE_DATE,
    )


def to_remote_pictures(entries: Iterable[RemoteCatalogEntry]) -> list[RemotePicture]:
    """Map entries preserving the response order."""
    return [to_remote_picture(entry) for entry in entries]
