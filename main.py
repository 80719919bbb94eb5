from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtCore import QCoreApplication, QMetaObject, Qt
from loguru import logger

from app.dependencies import AppDependencies
from app.localization import get_current_localization
from core.models import picture_source
from core.services.interfaces import CatalogResult
from infrastructure.catalog_client import RemoteCatalogClient
from infrastructure.image_storage import FileImageStorage
from infrastructure.logging import init_logging
from infrastructure.resources import BundledResources
from infrastructure.settings import JsonSettings, load_app_config

BASE_DIR = Path(__file__).parent


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    config = load_app_config(settings)
    init_logging(config.log_dir)

    app = QCoreApplication(sys.argv)

    storage = FileImageStorage(config.storage_dir, config.thumbnail_side)
    deps = AppDependencies(
        storage=storage,
        catalog_client=RemoteCatalogClient(config.catalog_url, config.timeout_seconds),
        resources=BundledResources(config.resources_dir),
        localization=get_current_localization(config.language),
        captured_pictures=storage.list_pictures(),
        start_fetch=False,
    )
    logger.info("{} started with {} pictures", deps.localization.app_name, len(deps.pictures))

    def _on_catalog_finished(result: CatalogResult) -> None:
        logger.info(
            "Catalog {}: {} added, error={}", result.status.value, result.added, result.error
        )
        for picture in deps.pictures:
            logger.info("[{}] {} - {}", picture_source(picture), picture.name, picture.date_string)
        QMetaObject.invokeMethod(app, "quit", Qt.QueuedConnection)

    deps.catalogFinished.connect(_on_catalog_finished)
    deps.start_catalog_fetch()

    code = app.exec()
    deps.shutdown(int(config.timeout_seconds * 1000))
    return code


if __name__ == "__main__":
    raise SystemExit(main())
