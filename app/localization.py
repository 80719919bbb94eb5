"""Named UI strings per language."""

from __future__ import annotations

from dataclasses import dataclass
import locale


@dataclass(frozen=True)
class Localization:
    app_name: str
    back: str
    picture: str
    take_photo: str
    add_photo: str
    sample_name: str
    sample_description: str
    new_photo_name: str
    new_photo_description: str


ENGLISH = Localization(
    app_name="Picture Gallery",
    back="Back",
    picture="Picture:",
    take_photo="Take photo",
    add_photo="Add photo",
    sample_name="City trip",
    sample_description="Sample pictures bundled with the gallery",
    new_photo_name="New photo",
    new_photo_description="Photo taken with the camera",
)

GERMAN = Localization(
    app_name="Bildergalerie",
    back="Zurück",
    picture="Bild:",
    take_photo="Foto aufnehmen",
    add_photo="Foto hinzufügen",
    sample_name="Städtereise",
    sample_description="Beispielbilder der Galerie",
    new_photo_name="Neues Foto",
    new_photo_description="Mit der Kamera aufgenommenes Foto",
)

LOCALIZATIONS: dict[str, Localization] = {"en": ENGLISH, "de": GERMAN}


def get_current_localization(language: str | None = None) -> Localization:
    """Return strings for `language` (e.g. "de" or "de_DE"), else the system locale.

    Unknown languages fall back to English.
    """
    if not language:
        language = locale.getlocale()[0] or ""
    code = language.replace("-", "_").split("_", 1)[0].lower()
    return LOCALIZATIONS.get(code, ENGLISH)
