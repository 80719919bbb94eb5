"""Observable, thread-safe list of gallery pictures."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import threading

from PySide6.QtCore import QObject, Signal

from core.errors import PictureNotFoundError
from core.models import PictureRecord


class PictureList(QObject):
    """Ordered pictures shown by the gallery.

    Insertion order is display order. Lookup is by `picture_id`, and the
    stored value must also equal the record passed in. `changed` is emitted
    after every mutation from the mutating thread; widgets living on the UI
    thread receive it through a queued connection.
    """

    changed = Signal()

    def __init__(self, pictures: Iterable[PictureRecord] = (), parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._lock = threading.RLock()
        self._items: list[PictureRecord] = list(pictures)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[PictureRecord]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> PictureRecord:
        with self._lock:
            return self._items[index]

    def snapshot(self) -> list[PictureRecord]:
        """Return a copy of the current pictures."""
        with self._lock:
            return list(self._items)

    def append(self, picture: PictureRecord) -> None:
        with self._lock:
            self._items.append(picture)
        self.changed.emit()

    def extend(self, pictures: Iterable[PictureRecord]) -> int:
        """Append `pictures` in order and return how many were added."""
        new_items = list(pictures)
        if not new_items:
            return 0
        with self._lock:
            self._items.extend(new_items)
        self.changed.emit()
        return len(new_items)

    def _find(self, picture: PictureRecord) -> int:
        # An out-of-date value of an edited picture does not match
        for index, item in enumerate(self._items):
            if item.picture_id == picture.picture_id and item == picture:
                return index
        return -1

    def index_of(self, picture: PictureRecord) -> int:
        """Return the position of `picture`, raising `PictureNotFoundError` if absent."""
        with self._lock:
            index = self._find(picture)
        if index < 0:
            raise PictureNotFoundError(picture.picture_id)
        return index

    def contains(self, picture: PictureRecord) -> bool:
        with self._lock:
            return self._find(picture) >= 0

    def replace(self, old: PictureRecord, new: PictureRecord) -> int:
        """Put `new` where `old` is and return that index."""
        with self._lock:
            index = self._find(old)
            if index < 0:
                raise PictureNotFoundError(old.picture_id)
            self._items[index] = new
        self.changed.emit()
        return index

    def remove(self, picture: PictureRecord) -> bool:
        """Remove `picture`; return False without emitting when it is absent."""
        with self._lock:
            index = self._find(picture)
            if index < 0:
                return False
            del self._items[index]
        self.changed.emit()
        return True
