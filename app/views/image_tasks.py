from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal
from loguru import logger

from core.models import PictureRecord


class ImageLoadReceiver(QObject):
    """Minimal receiver owning the `imageLoaded` signal used by `ImageTaskRunner`."""

    imageLoaded = Signal(str, str, object)  # token, picture_id, bytes | None


class _ImageTask(QRunnable):
    """QRunnable for background picture loading.

    Emits `receiver.imageLoaded(token, picture_id, data)` upon completion,
    with `data` set to None when loading failed. The receiver is expected to
    own a Qt `Signal(str, str, object)` named `imageLoaded`.
    """

    def __init__(
        self, *, picture: PictureRecord, thumbnail: bool, provider: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._picture = picture
        self._thumbnail = thumbnail
        self._provider = provider
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        data: bytes | None
        try:
            if self._thumbnail:
                data = self._provider.get_thumbnail(self._picture)
            else:
                data = self._provider.get_image(self._picture)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.error("Image task {} failed: {}", self._token, ex)
            data = None
        self._receiver.imageLoaded.emit(  # type: ignore[attr-defined]
            self._token, self._picture.picture_id, data
        )


class ImageTaskRunner:
    """Dispatches picture load tasks to a thread pool.

    Tokens have the format:
    - Full image: "image|{picture_id}"
    - Thumbnail: "thumb|{picture_id}"
    """

    def __init__(
        self, *, provider: Any, receiver: QObject, pool: QThreadPool | None = None
    ) -> None:
        self._provider = provider
        self._receiver = receiver
        self._pool = pool or QThreadPool.globalInstance()

    def _start(self, picture: PictureRecord, thumbnail: bool) -> str:
        kind = "thumb" if thumbnail else "image"
        token = f"{kind}|{picture.picture_id}"
        task = _ImageTask(
            picture=picture,
            thumbnail=thumbnail,
            provider=self._provider,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token

    def request_image(self, picture: PictureRecord) -> str:
        """Request the full image of `picture`. Returns the token string."""
        return self._start(picture, thumbnail=False)

    def request_thumbnail(self, picture: PictureRecord) -> str:
        """Request the thumbnail of `picture`. Returns the token string."""
        return self._start(picture, thumbnail=True)

    def wait_for_done(self, timeout_ms: int = -1) -> bool:
        """Block until every queued task finished; False on timeout."""
        return self._pool.waitForDone(timeout_ms)
