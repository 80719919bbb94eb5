"""Picture notifications shown to the user."""

from __future__ import annotations

from loguru import logger

from app.localization import Localization
from core.models import PictureRecord
from core.services.interfaces import INotification


class PopupNotification(INotification):
    """Formats picture notifications; subclasses decide how to show them."""

    def __init__(self, localization: Localization) -> None:
        self._localization = localization

    def show_popup_message(self, text: str) -> None:
        raise NotImplementedError

    def notify_image_data(self, picture: PictureRecord) -> None:
        self.show_popup_message(f"{self._localization.picture} {picture.name}")


class LogPopupNotification(PopupNotification):
    """Headless popup: the message goes to the application log."""

    def show_popup_message(self, text: str) -> None:
        logger.info("Popup: {}", text)
