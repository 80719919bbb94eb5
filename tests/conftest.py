"""Shared fixtures for the gallery test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from PySide6.QtCore import QCoreApplication
import pytest

from core.services.interfaces import IImageStorage
from infrastructure.catalog_client import RemoteCatalogClient
from infrastructure.resources import RESOURCE_PICTURES, BundledResources


@pytest.fixture(scope="session")
def qapp():
    """One QCoreApplication for the whole session."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def resource_dir(tmp_path: Path) -> Path:
    """Bundle directory whose files contain recognizable bytes."""
    base = tmp_path / "resources"
    base.mkdir()
    for resource, thumbnail, *_ in RESOURCE_PICTURES:
        (base / resource).write_bytes(f"full:{resource}".encode())
        (base / thumbnail).write_bytes(f"thumb:{thumbnail}".encode())
    return base


@pytest.fixture
def resources(resource_dir: Path) -> BundledResources:
    return BundledResources(resource_dir)


@pytest.fixture
def storage() -> MagicMock:
    return MagicMock(spec=IImageStorage)


@pytest.fixture
def remote() -> MagicMock:
    client = MagicMock(spec=RemoteCatalogClient)
    client.get_all.return_value = []
    return client
