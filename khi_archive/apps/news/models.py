"""
News items, their categories, media and audit log.

Like Writings, a News item is bilingual: a Sorani and a Kurmanji title and
description, and separate tag/keyword sets for each language. Categories are
named in both languages, but the Sorani name is the one that identifies them.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.audit import AuditedMixin
from khi_archive.lib.choices import Language, MediaType
from khi_archive.lib.fields import case_insensitive_char_field, content_text_field, manual_date_time_field, url_field
from khi_archive.lib.managers import WithRelationsManager

from ..taxonomy.models import Keyword, Tag

__all__ = [
    "News",
    "NewsAuditLog",
    "NewsCategory",
    "NewsMedia",
    "NewsSubCategory",
]


class NewsCategory(models.Model):
    """
    Top-level grouping of News, e.g. "Events".
    """
    id = models.BigAutoField(primary_key=True)
    name_ckb = case_insensitive_char_field(max_length=120, blank=False)
    name_kmr = case_insensitive_char_field(max_length=120, blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["name_ckb"],
                name="khi_news_cat_uniq_name_ckb",
            ),
        ]
        verbose_name = _("News Category")
        verbose_name_plural = _("News Categories")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.name_ckb}"


class NewsSubCategory(models.Model):
    """
    A subdivision of exactly one NewsCategory.

    Names are unique within their category only.
    """
    id = models.BigAutoField(primary_key=True)
    category = models.ForeignKey(
        NewsCategory,
        on_delete=models.CASCADE,
        related_name="sub_categories",
    )
    name_ckb = case_insensitive_char_field(max_length=120, blank=False)
    name_kmr = case_insensitive_char_field(max_length=120, blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["category", "name_ckb"],
                name="khi_news_subcat_uniq_cat_name",
            ),
        ]
        verbose_name = _("News Sub-Category")
        verbose_name_plural = _("News Sub-Categories")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.category_id}:{self.name_ckb}"


class News(AuditedMixin):
    """
    A bilingual news item.
    """
    objects = models.Manager()
    with_relations = WithRelationsManager(
        "category",
        "sub_category",
        prefetch=("tags_ckb", "tags_kmr", "keywords_ckb", "keywords_kmr", "media"),
    )

    id = models.BigAutoField(primary_key=True)
    cover_url = url_field()
    date_published = models.DateField()

    # Categories are reference data; deleting one that is still in use fails.
    category = models.ForeignKey(
        NewsCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="news",
    )
    sub_category = models.ForeignKey(
        NewsSubCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="news",
    )

    # List of Language values ("CKB", "KMR") this item has content in.
    content_languages = models.JSONField(default=list, blank=True)

    title_ckb = case_insensitive_char_field(max_length=300, blank=True, default="")
    description_ckb = content_text_field()
    title_kmr = case_insensitive_char_field(max_length=300, blank=True, default="")
    description_kmr = content_text_field()

    tags_ckb: models.ManyToManyField[Tag, models.Model] = models.ManyToManyField(
        Tag, related_name="news_ckb", blank=True,
    )
    tags_kmr: models.ManyToManyField[Tag, models.Model] = models.ManyToManyField(
        Tag, related_name="news_kmr", blank=True,
    )
    keywords_ckb: models.ManyToManyField[Keyword, models.Model] = models.ManyToManyField(
        Keyword, related_name="news_ckb", blank=True,
    )
    keywords_kmr: models.ManyToManyField[Keyword, models.Model] = models.ManyToManyField(
        Keyword, related_name="news_kmr", blank=True,
    )

    class Meta:
        indexes = [
            models.Index(fields=["date_published"], name="khi_news_idx_published"),
            models.Index(fields=["title_ckb"], name="khi_news_idx_title_ckb"),
            models.Index(fields=["title_kmr"], name="khi_news_idx_title_kmr"),
        ]
        verbose_name = _("News")
        verbose_name_plural = _("News")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.title_ckb or self.title_kmr}"

    def clean(self):
        super().clean()
        if self.sub_category_id is not None:
            if self.category_id is None:
                self.category_id = self.sub_category.category_id
            elif self.sub_category.category_id != self.category_id:
                raise ValidationError(
                    {"sub_category": _("The sub-category does not belong to the selected category.")}
                )
        if not self.content_languages:
            raise ValidationError({"content_languages": _("A news item needs content in at least one language.")})
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


class NewsMedia(models.Model):
    """
    A media file or link attached to a single News item.

    Besides the stored file ``url``, media may point somewhere else entirely
    (``external_url``) or carry a player link (``embed_url``).
    """
    id = models.BigAutoField(primary_key=True)
    news = models.ForeignKey(
        News,
        on_delete=models.CASCADE,
        related_name="media",
    )
    media_type = models.CharField(max_length=20, choices=MediaType.choices)
    url = url_field()
    external_url = url_field()
    embed_url = url_field()
    sort_order = models.IntegerField(default=0)
    created_at = manual_date_time_field()

    class Meta:
        ordering = ["sort_order", "id"]
        indexes = [
            models.Index(fields=["news", "sort_order"], name="khi_nm_idx_news_order"),
            models.Index(fields=["media_type"], name="khi_nm_idx_type"),
        ]
        verbose_name = _("News Media")
        verbose_name_plural = _("News Media")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.media_type} #{self.sort_order}"


class NewsAuditLog(models.Model):
    """
    Who did what to a News item, and when.
    """
    id = models.BigAutoField(primary_key=True)
    news = models.ForeignKey(
        News,
        on_delete=models.CASCADE,
        related_name="audit_logs",
    )
    action = models.CharField(max_length=50)
    performed_by = models.CharField(max_length=120, blank=True, default="")
    note = content_text_field()
    action_time = manual_date_time_field()

    class Meta:
        indexes = [
            models.Index(fields=["news", "action_time"], name="khi_nlog_idx_news_time"),
        ]
        verbose_name = _("News Audit Log")
        verbose_name_plural = _("News Audit Logs")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.action} news:{self.news_id}"
