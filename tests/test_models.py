"""Tests for picture records."""

from dataclasses import FrozenInstanceError

import pytest

from core.models import (
    BundledPicture,
    CapturedPicture,
    GpsPosition,
    RemotePicture,
    picture_source,
    with_metadata,
)


def _captured(**overrides) -> CapturedPicture:
    values = dict(
        storage_key="cap-1",
        name="Cat",
        description="On the sofa",
        gps=GpsPosition(1.5, 2.5),
        date_string="2024-01-01",
    )
    values.update(overrides)
    return CapturedPicture(**values)


class TestPictureRecords:
    def test_records_are_immutable(self):
        picture = _captured()
        with pytest.raises(FrozenInstanceError):
            picture.name = "Dog"  # type: ignore[misc]

    def test_each_record_gets_its_own_id(self):
        first = _captured()
        second = _captured()
        assert first.picture_id != second.picture_id
        assert first != second

    def test_same_id_and_fields_are_equal(self):
        first = _captured(picture_id="abc")
        second = _captured(picture_id="abc")
        assert first == second


class TestWithMetadata:
    def test_only_name_and_description_change(self):
        picture = _captured()
        edited = with_metadata(picture, "Dog", "In the garden")

        assert isinstance(edited, CapturedPicture)
        assert edited.name == "Dog"
        assert edited.description == "In the garden"
        assert edited.storage_key == picture.storage_key
        assert edited.gps == picture.gps
        assert edited.date_string == picture.date_string
        assert edited.picture_id == picture.picture_id

    def test_original_is_untouched(self):
        picture = _captured()
        with_metadata(picture, "Dog", "In the garden")
        assert picture.name == "Cat"


class TestPictureSource:
    @pytest.mark.parametrize(
        "picture, expected",
        [
            (BundledPicture("1.png", "1_thumb.png", "n", "d", GpsPosition(0, 0), "x"), "bundled"),
            (_captured(), "captured"),
            (RemotePicture("http://x/1.png", "n", "d", GpsPosition(0, 0), "x"), "remote"),
        ],
    )
    def test_source_tag(self, picture, expected):
        assert picture_source(picture) == expected
