"""Tests for the composition root and the one-shot catalog fetch."""

import threading

import pytest

from app.dependencies import AppDependencies
from app.localization import ENGLISH
from app.notification import LogPopupNotification
from core.errors import DecodeError, NetworkError
from core.models import (
    REMOTE_DESCRIPTION,
    BundledPicture,
    CapturedPicture,
    GpsPosition,
    RemoteCatalogEntry,
    RemotePicture,
)
from core.services.interfaces import CatalogStatus
from infrastructure.resources import RESOURCE_PICTURES

SEED_IDS = [resource for resource, *_ in RESOURCE_PICTURES]
WAIT_MS = 5000


def _entries(*names):
    return [
        RemoteCatalogEntry(id=str(i), name=n, image_url=f"http://x/{i}.png")
        for i, n in enumerate(names)
    ]


@pytest.fixture
def make_deps(qapp, storage, remote, resources):
    created = []

    def factory(**kwargs):
        kwargs.setdefault("localization", ENGLISH)
        deps = AppDependencies(storage=storage, catalog_client=remote, resources=resources, **kwargs)
        created.append(deps)
        return deps

    yield factory
    for deps in created:
        deps.shutdown(WAIT_MS)


def _assert_only_seed(deps):
    assert all(isinstance(p, BundledPicture) for p in deps.pictures)
    assert [p.resource_id for p in deps.pictures] == SEED_IDS


class TestSeed:
    def test_seeded_synchronously_before_fetch(self, make_deps):
        deps = make_deps(start_fetch=False)

        _assert_only_seed(deps)
        assert deps.catalog_result.status is CatalogStatus.PENDING

    def test_captured_pictures_follow_seed(self, make_deps):
        capture = CapturedPicture("k", "Cap", "d", GpsPosition(0.0, 0.0), "date")
        deps = make_deps(start_fetch=False, captured_pictures=[capture])

        assert deps.pictures[len(SEED_IDS)] == capture
        assert len(deps.pictures) == len(SEED_IDS) + 1

    def test_exposes_collaborators(self, make_deps):
        deps = make_deps(start_fetch=False)
        assert deps.localization is ENGLISH
        assert isinstance(deps.notification, LogPopupNotification)
        assert deps.share_picture is not None
        assert deps.image_provider is not None


class TestCatalogFetch:
    def test_remote_pictures_appended_in_response_order(self, make_deps, remote):
        remote.get_all.return_value = _entries("Pika", "Bulba", "Char")

        deps = make_deps()
        assert deps.wait_for_catalog(WAIT_MS)

        remote_pictures = deps.pictures.snapshot()[len(SEED_IDS):]
        assert [p.name for p in remote_pictures] == ["Pika", "Bulba", "Char"]
        assert all(isinstance(p, RemotePicture) for p in remote_pictures)
        assert remote_pictures[0].image_url == "http://x/0.png"
        assert remote_pictures[0].description == REMOTE_DESCRIPTION
        assert deps.catalog_result.status is CatalogStatus.LOADED
        assert deps.catalog_result.added == 3

    @pytest.mark.parametrize("error", [NetworkError("offline"), DecodeError("garbage")])
    def test_failure_keeps_seed_and_is_reported(self, make_deps, remote, error):
        remote.get_all.side_effect = error

        deps = make_deps()
        assert deps.wait_for_catalog(WAIT_MS)

        _assert_only_seed(deps)
        assert deps.catalog_result.status is CatalogStatus.FAILED
        assert str(error) in deps.catalog_result.error

    def test_unexpected_error_is_contained(self, make_deps, remote):
        remote.get_all.side_effect = RuntimeError("bug")

        deps = make_deps()
        assert deps.wait_for_catalog(WAIT_MS)

        _assert_only_seed(deps)
        assert deps.catalog_result.status is CatalogStatus.FAILED

    def test_finished_signal_carries_result(self, make_deps, remote, qapp):
        remote.get_all.return_value = _entries("Pika")
        received = []
        deps = make_deps(start_fetch=False)
        deps.catalogFinished.connect(lambda result: received.append(result))

        deps.start_catalog_fetch()
        assert deps.wait_for_catalog(WAIT_MS)
        qapp.processEvents()

        assert [r.status for r in received] == [CatalogStatus.LOADED]

    def test_fetch_runs_once(self, make_deps, remote):
        deps = make_deps()
        deps.start_catalog_fetch()
        assert deps.wait_for_catalog(WAIT_MS)
        remote.get_all.assert_called_once_with()


class TestShutdown:
    def test_shutdown_before_start_cancels(self, make_deps, remote):
        deps = make_deps(start_fetch=False)

        assert deps.shutdown(WAIT_MS)

        assert deps.catalog_result.status is CatalogStatus.CANCELLED
        remote.get_all.assert_not_called()

    def test_shutdown_during_fetch_drops_results(self, make_deps, remote):
        gate = threading.Event()
        started = threading.Event()

        def slow_get_all():
            started.set()
            gate.wait(WAIT_MS / 1000)
            return _entries("Late")

        remote.get_all.side_effect = slow_get_all
        deps = make_deps()
        assert started.wait(WAIT_MS / 1000)

        releaser = threading.Timer(0.1, gate.set)
        releaser.start()
        assert deps.shutdown(WAIT_MS)
        releaser.join()

        _assert_only_seed(deps)
        assert deps.catalog_result.status is CatalogStatus.CANCELLED


class TestConcurrentMutation:
    def test_user_edits_during_fetch_are_consistent(self, make_deps, remote):
        gate = threading.Event()
        started = threading.Event()

        def slow_get_all():
            started.set()
            gate.wait(WAIT_MS / 1000)
            return _entries("Pika", "Bulba")

        remote.get_all.side_effect = slow_get_all
        deps = make_deps()
        assert started.wait(WAIT_MS / 1000)

        first, second = deps.pictures[0], deps.pictures[1]
        edited = deps.image_provider.edit(first, "Edited", "While loading")
        deps.image_provider.delete(second)
        gate.set()
        assert deps.wait_for_catalog(WAIT_MS)

        names = [p.name for p in deps.pictures]
        assert len(names) == len(SEED_IDS) - 1 + 2
        assert deps.pictures[0] == edited
        assert not deps.pictures.contains(second)
        assert names[-2:] == ["Pika", "Bulba"]


class TestAddCapturedPicture:
    def test_saves_then_appends(self, make_deps, storage):
        deps = make_deps(start_fetch=False)
        capture = CapturedPicture("new", "New photo", "d", GpsPosition(1.0, 2.0), "today")

        deps.add_captured_picture(capture, b"jpeg")

        storage.save_image.assert_called_once_with(capture, b"jpeg")
        assert deps.pictures[len(deps.pictures) - 1] == capture
