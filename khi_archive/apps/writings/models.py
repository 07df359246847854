"""
Writings are books and other long-form texts held by the archive.

A Writing is bilingual: it carries one content block per language (title,
writer, file details...), stored as parallel ``<field>_ckb`` / ``<field>_kmr``
columns on the same row. Tags and Keywords are also kept per language, so
there are four separate many-to-many relations to the shared taxonomy
tables. A tag in the Sorani set says nothing about the Kurmanji set.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.audit import AuditedMixin
from khi_archive.lib.choices import Language
from khi_archive.lib.fields import case_insensitive_char_field, content_text_field, manual_date_time_field, url_field
from khi_archive.lib.managers import WithRelationsManager

from ..taxonomy.models import Keyword, Tag

__all__ = [
    "CONTENT_FIELDS",
    "Writing",
    "WritingFileFormat",
    "WritingLog",
    "WritingLogAction",
    "WritingTopic",
]

# Names of the per-language content fields. Each exists on Writing as
# ``<name>_ckb`` and ``<name>_kmr``.
CONTENT_FIELDS = (
    "title",
    "description",
    "writer",
    "cover_url",
    "file_url",
    "file_format",
    "file_size_bytes",
    "page_count",
    "genre",
)


class WritingTopic(models.TextChoices):
    HISTORICAL = "HISTORICAL", _("Historical")
    FOLKLORE = "FOLKLORE", _("Folklore")
    RELIGIOUS = "RELIGIOUS", _("Religious")
    POLITICAL = "POLITICAL", _("Political")
    POETRY = "POETRY", _("Poetry")
    LITERATURE = "LITERATURE", _("Literature")
    CULTURAL = "CULTURAL", _("Cultural")
    EDUCATIONAL = "EDUCATIONAL", _("Educational")
    SCIENTIFIC = "SCIENTIFIC", _("Scientific")
    BIOGRAPHICAL = "BIOGRAPHICAL", _("Biographical")
    CHILDREN = "CHILDREN", _("Children")
    PHILOSOPHY = "PHILOSOPHY", _("Philosophy")
    SOCIOLOGY = "SOCIOLOGY", _("Sociology")
    LINGUISTICS = "LINGUISTICS", _("Linguistics")
    ARTS = "ARTS", _("Arts")
    ECONOMICS = "ECONOMICS", _("Economics")
    MEDICINE = "MEDICINE", _("Medicine")
    LAW = "LAW", _("Law")
    OTHER = "OTHER", _("Other")


class WritingFileFormat(models.TextChoices):
    PDF = "PDF", _("PDF")
    DOCX = "DOCX", _("DOCX")
    DOC = "DOC", _("DOC")
    TXT = "TXT", _("Plain text")
    EPUB = "EPUB", _("EPUB")
    ODT = "ODT", _("ODT")
    RTF = "RTF", _("RTF")
    HTML = "HTML", _("HTML")
    OTHER = "OTHER", _("Other")


class Writing(AuditedMixin):
    """
    A bilingual book or text.

    Only the content block of a language listed in ``content_languages`` is
    meaningful, and that block must have a title.
    """
    objects = models.Manager()
    with_relations = WithRelationsManager(
        prefetch=("tags_ckb", "tags_kmr", "keywords_ckb", "keywords_kmr"),
    )

    id = models.BigAutoField(primary_key=True)

    # List of Language values ("CKB", "KMR") this writing has content in.
    content_languages = models.JSONField(default=list, blank=True)

    # Sorani (CKB) content
    title_ckb = case_insensitive_char_field(max_length=300, blank=True, default="")
    description_ckb = content_text_field()
    writer_ckb = case_insensitive_char_field(max_length=255, blank=True, default="")
    cover_url_ckb = url_field()
    file_url_ckb = url_field()
    file_format_ckb = models.CharField(max_length=20, choices=WritingFileFormat.choices, blank=True, default="")
    file_size_bytes_ckb = models.PositiveBigIntegerField(null=True, blank=True)
    page_count_ckb = models.PositiveIntegerField(null=True, blank=True)
    genre_ckb = case_insensitive_char_field(max_length=120, blank=True, default="")

    # Kurmanji (KMR) content
    title_kmr = case_insensitive_char_field(max_length=300, blank=True, default="")
    description_kmr = content_text_field()
    writer_kmr = case_insensitive_char_field(max_length=255, blank=True, default="")
    cover_url_kmr = url_field()
    file_url_kmr = url_field()
    file_format_kmr = models.CharField(max_length=20, choices=WritingFileFormat.choices, blank=True, default="")
    file_size_bytes_kmr = models.PositiveBigIntegerField(null=True, blank=True)
    page_count_kmr = models.PositiveIntegerField(null=True, blank=True)
    genre_kmr = case_insensitive_char_field(max_length=120, blank=True, default="")

    writing_topic = models.CharField(max_length=40, choices=WritingTopic.choices, blank=True, default="")
    published_by_institute = models.BooleanField(
        default=False,
        help_text=_("Whether the institute itself published this writing."),
    )

    tags_ckb: models.ManyToManyField[Tag, models.Model] = models.ManyToManyField(
        Tag, related_name="writings_ckb", blank=True,
    )
    tags_kmr: models.ManyToManyField[Tag, models.Model] = models.ManyToManyField(
        Tag, related_name="writings_kmr", blank=True,
    )
    keywords_ckb: models.ManyToManyField[Keyword, models.Model] = models.ManyToManyField(
        Keyword, related_name="writings_ckb", blank=True,
    )
    keywords_kmr: models.ManyToManyField[Keyword, models.Model] = models.ManyToManyField(
        Keyword, related_name="writings_kmr", blank=True,
    )

    class Meta:
        indexes = [
            models.Index(fields=["title_ckb"], name="khi_wr_idx_title_ckb"),
            models.Index(fields=["title_kmr"], name="khi_wr_idx_title_kmr"),
            models.Index(fields=["writer_ckb"], name="khi_wr_idx_writer_ckb"),
            models.Index(fields=["writer_kmr"], name="khi_wr_idx_writer_kmr"),
            models.Index(fields=["writing_topic"], name="khi_wr_idx_topic"),
        ]
        verbose_name = _("Writing")
        verbose_name_plural = _("Writings")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.display_title}"

    @property
    def display_title(self) -> str:
        """
        The Sorani title if there is one, else the Kurmanji one.
        """
        return self.title_ckb or self.title_kmr

    def clean(self):
        super().clean()
        if not self.content_languages:
            raise ValidationError(
                {"content_languages": _("A writing needs content in at least one language.")}
            )
        errors = {}
        for language in self.content_languages:
            try:
                field_name = f"title_{Language(language).suffix}"
            except ValueError:
                errors["content_languages"] = _("Unknown language: %(language)r") % {"language": language}
                continue
            if not getattr(self, field_name).strip():
                errors[field_name] = _("A title is required for every content language.")
        if errors:
            raise ValidationError(errors)


class WritingLogAction(models.TextChoices):
    CREATED = "CREATED", _("Created")
    UPDATED = "UPDATED", _("Updated")
    DELETED = "DELETED", _("Deleted")


class WritingLog(models.Model):
    """
    Audit trail entry for a Writing.

    When a Writing is deleted its earlier entries go with it, and a single
    DELETED entry is kept with ``writing`` set to NULL. ``writing_ref`` keeps
    the id that entry was about.
    """
    id = models.BigAutoField(primary_key=True)
    writing = models.ForeignKey(
        Writing,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="logs",
    )
    writing_ref = models.BigIntegerField(
        help_text=_("Id of the writing this entry is about, kept after deletion."),
    )
    action = models.CharField(max_length=20, choices=WritingLogAction.choices)
    actor_id = models.CharField(max_length=64, blank=True, default="")
    actor_name = models.CharField(max_length=120, blank=True, default="")
    request_id = models.CharField(max_length=64, blank=True, default="")
    meta = models.JSONField(default=dict, blank=True)
    details = content_text_field()
    created_at = manual_date_time_field()

    class Meta:
        indexes = [
            models.Index(fields=["writing_ref", "created_at"], name="khi_wlog_idx_ref_created"),
        ]
        verbose_name = _("Writing Log")
        verbose_name_plural = _("Writing Logs")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.action} writing:{self.writing_ref}"
