"""Bundled sample pictures shipped under `resources/pictures`."""

from __future__ import annotations

from pathlib import Path

from core.models import BundledPicture, GpsPosition

# (resource, thumbnail, name, description, (lat, lon), date)
RESOURCE_PICTURES: tuple[tuple[str, str, str, str, tuple[float, float], str], ...] = (
    (
        "1.png",
        "1_thumb.png",
        "Amsterdam",
        "Canal houses along the Herengracht in late afternoon light.",
        (52.3676, 4.9041),
        "2023-04-13",
    ),
    (
        "2.png",
        "2_thumb.png",
        "Berlin",
        "The TV tower seen from Alexanderplatz.",
        (52.5208, 13.4094),
        "2023-05-02",
    ),
    (
        "3.png",
        "3_thumb.png",
        "Lisbon",
        "Tram 28 climbing through Alfama.",
        (38.7139, -9.1334),
        "2023-06-21",
    ),
    (
        "4.png",
        "4_thumb.png",
        "Prague",
        "Charles Bridge at dawn, before the crowds.",
        (50.0865, 14.4114),
        "2023-09-09",
    ),
)


def resource_pictures() -> list[BundledPicture]:
    """Return fresh `BundledPicture` values for the bundled seed set."""
    return [
        BundledPicture(
            resource_id=resource,
            thumbnail_resource_id=thumbnail,
            name=name,
            description=description,
            gps=GpsPosition(lat, lon),
            date_string=date,
        )
        for resource, thumbnail, name, description, (lat, lon), date in RESOURCE_PICTURES
    ]


class BundledResources:
    """Reads bundled resource files relative to `base_dir`."""

    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)

    def path_of(self, resource_id: str) -> Path:
        """Return the file path of `resource_id`, refusing paths outside the base dir."""
        path = (self._base_dir / resource_id).resolve()
        if self._base_dir.resolve() not in path.parents:
            raise ValueError(f"Resource outside bundle: {resource_id}")
        return path

    def read_bytes(self, resource_id: str) -> bytes:
        """Return the bytes of `resource_id` unchanged."""
        return self.path_of(resource_id).read_bytes()
