"""Application composition root.

`AppDependencies` owns the picture list, wires the image provider to its
collaborators and runs the one-shot remote catalog fetch on its own thread
pool. The fetch outcome is published through `catalog_result` and the
`catalogFinished` signal instead of being raised.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import threading

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal
from loguru import logger

from app.image_provider import ImageProvider
from app.localization import Localization, get_current_localization
from app.notification import LogPopupNotification
from app.viewmodels.picture_list import PictureList
from core.errors import DecodeError, NetworkError
from core.models import CapturedPicture
from core.services.catalog_service import to_remote_pictures
from core.services.interfaces import (
    CatalogResult,
    CatalogStatus,
    IImageStorage,
    INotification,
    ISharePicture,
)
from infrastructure.catalog_client import RemoteCatalogClient
from infrastructure.resources import BundledResources, resource_pictures
from infrastructure.share_service import DesktopSharePicture


class CatalogTask(QRunnable):
    """Fetches the remote catalog once and appends its pictures to the list.

    The task only ever appends. Failures are logged and reported through
    `on_finished`; nothing is raised out of `run`.
    """

    def __init__(
        self,
        *,
        client: RemoteCatalogClient,
        pictures: PictureList,
        cancelled: threading.Event,
        on_finished: Callable[[CatalogResult], None],
    ) -> None:
        super().__init__()
        self._client = client
        self._pictures = pictures
        self._cancelled = cancelled
        self._on_finished = on_finished

    def run(self) -> None:  # type: ignore[override]
        if self._cancelled.is_set():
            self._on_finished(CatalogResult(CatalogStatus.CANCELLED))
            return
        try:
            entries = self._client.get_all()
        except (NetworkError, DecodeError) as ex:
            logger.error("Catalog fetch failed: {}", ex)
            self._on_finished(CatalogResult(CatalogStatus.FAILED, error=str(ex)))
            return
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected catalog fetch error: {}", ex)
            self._on_finished(CatalogResult(CatalogStatus.FAILED, error=repr(ex)))
            return

        if self._cancelled.is_set():
            logger.info("Catalog fetch cancelled, dropping {} entries", len(entries))
            self._on_finished(CatalogResult(CatalogStatus.CANCELLED))
            return
        added = self._pictures.extend(to_remote_pictures(entries))
        logger.info("Appended {} remote pictures", added)
        self._on_finished(CatalogResult(CatalogStatus.LOADED, added=added))


class AppDependencies(QObject):
    """Wires collaborators together and owns the gallery picture list."""

    catalogFinished = Signal(object)  # CatalogResult

    def __init__(
        self,
        *,
        storage: IImageStorage,
        catalog_client: RemoteCatalogClient,
        resources: BundledResources,
        localization: Localization | None = None,
        notification: INotification | None = None,
        share_picture: ISharePicture | None = None,
        captured_pictures: Iterable[CapturedPicture] = (),
        pool: QThreadPool | None = None,
        start_fetch: bool = True,
        parent: QObject | None = None,
    ) -> None:
        """Create the composition root.

        Args:
            storage: Storage for camera captures.
            catalog_client: Client for the remote card catalog.
            resources: Reader for bundled sample pictures.
            localization: UI strings (defaults to the system language).
            notification: Notification sink (defaults to a log popup).
            share_picture: Share implementation (defaults to desktop export).
            captured_pictures: Stored captures appended after the bundled seed.
            pool: Thread pool for the catalog fetch (defaults to a private pool).
            start_fetch: Start the catalog fetch immediately.
            parent: Optional Qt parent.
        """
        super().__init__(parent)
        logger.info("Initializing application dependencies")
        self.storage = storage
        self.localization = localization or get_current_localization()
        self.pictures = PictureList(resource_pictures(), parent=self)
        self.pictures.extend(captured_pictures)
        self.image_provider = ImageProvider(self.pictures, storage, resources, catalog_client)
        self.notification = notification or LogPopupNotification(self.localization)
        self.share_picture = share_picture or DesktopSharePicture(self.image_provider)

        self._catalog_client = catalog_client
        self._pool = pool or QThreadPool(self)
        self._result_lock = threading.Lock()
        self._catalog_result = CatalogResult(CatalogStatus.PENDING)
        self._cancelled = threading.Event()
        self._catalog_task: CatalogTask | None = None
        if start_fetch:
            self.start_catalog_fetch()

    @property
    def catalog_result(self) -> CatalogResult:
        """Latest outcome of the catalog fetch."""
        with self._result_lock:
            return self._catalog_result

    def start_catalog_fetch(self) -> None:
        """Start the one-shot catalog fetch; later calls are ignored."""
        if self._catalog_task is not None:
            logger.debug("Catalog fetch already started")
            return
        self._catalog_task = CatalogTask(
            client=self._catalog_client,
            pictures=self.pictures,
            cancelled=self._cancelled,
            on_finished=self._on_catalog_finished,
        )
        self._catalog_task.setAutoDelete(False)
        self._pool.start(self._catalog_task)

    def wait_for_catalog(self, timeout_ms: int = -1) -> bool:
        """Block until the catalog fetch is over; False on timeout."""
        return self._pool.waitForDone(timeout_ms)

    def shutdown(self, timeout_ms: int = -1) -> bool:
        """Cancel the catalog fetch and join the pool."""
        self._cancelled.set()
        self._pool.clear()
        finished = self._pool.waitForDone(timeout_ms)
        with self._result_lock:
            if self._catalog_result.status is CatalogStatus.PENDING and finished:
                self._catalog_result = CatalogResult(CatalogStatus.CANCELLED)
        logger.info("Dependencies shut down (joined={})", finished)
        return finished

    def add_captured_picture(self, picture: CapturedPicture, image: bytes) -> None:
        """Persist a new capture and show it at the end of the list."""
        self.image_provider.save_image(picture, image)
        self.pictures.append(picture)

    def _on_catalog_finished(self, result: CatalogResult) -> None:
        with self._result_lock:
            self._catalog_result = result
        self.catalogFinished.emit(result)
