"""
Enumerations shared by every content app.

Values are stored and serialized as their uppercase names, e.g. ``"CKB"`` or
``"IMAGE"``, so they're stable across the database, JSON payloads and the
file-serving layer.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

DEFAULT_MEDIA_BASE_PREFIX = "testweb/"


class Language(models.TextChoices):
    """
    Languages that content can be authored in.
    """
    CKB = "CKB", _("Kurdish (Sorani)")
    KMR = "KMR", _("Kurdish (Kurmanji)")

    @classmethod
    def parse(cls, value: str | None) -> Language | None:
        """
        Parse a user-supplied language code.

        Matching is case-insensitive and ignores surrounding whitespace, so
        " kmr " is ``Language.KMR``. ``None`` passes through as ``None``.
        Raises ValueError for anything else.
        """
        if value is None:
            return None
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown language: {value!r}") from exc

    @property
    def suffix(self) -> str:
        """
        Suffix used for the per-language columns and relations, e.g. "ckb".
        """
        return self.value.lower()


class MediaType(models.TextChoices):
    """
    Kinds of media that can be attached to a content item.
    """
    IMAGE = "IMAGE", _("Image")
    VIDEO = "VIDEO", _("Video")
    AUDIO = "AUDIO", _("Audio")
    DOCUMENT = "DOCUMENT", _("Document")
    PDF = "PDF", _("PDF")
    TEXT = "TEXT", _("Text")

    @property
    def storage_prefix(self) -> str:
        """
        Directory (relative to the media base prefix) files of this type live in.
        """
        return _STORAGE_PREFIXES[self]


_STORAGE_PREFIXES = {
    MediaType.IMAGE: "images/",
    MediaType.VIDEO: "video/",
    MediaType.AUDIO: "audio/",
    MediaType.DOCUMENT: "files/",
    MediaType.PDF: "files/",
    MediaType.TEXT: "files/",
}


def media_storage_path(media_type: MediaType | str, filename: str) -> str:
    """
    Return the storage key a file of ``media_type`` should be uploaded to.

    The base prefix comes from ``settings.KHI_ARCHIVE["MEDIA_BASE_PREFIX"]``.
    """
    config = getattr(settings, "KHI_ARCHIVE", {})
    base = config.get("MEDIA_BASE_PREFIX", DEFAULT_MEDIA_BASE_PREFIX)
    return f"{base}{MediaType(media_type).storage_prefix}{filename}"


def parse_languages(values) -> list[str]:
    """
    Normalize an iterable of language codes into a de-duplicated list.

    Order of first appearance is kept. Raises ValueError on unknown codes.
    """
    languages: list[str] = []
    for value in values or []:
        language = Language.parse(value)
        if language is not None and language.value not in languages:
            languages.append(language.value)
    return languages
