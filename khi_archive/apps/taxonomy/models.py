"""
Tags and Keywords.

These are two parallel, flat vocabularies shared by every kind of content
item (Projects, Writings, News). A content item points at them through
many-to-many relations; nothing here points back. That means:

1. A Tag is created the first time any item uses its name, and is never
   deleted automatically, even when the last item using it goes away.
2. Names are stored exactly as entered. "History" and "history" are two
   different Tags, and the uniqueness constraint is case-sensitive.
3. Matching at query time is always case-insensitive (see the ``lower``
   lookups used by the content apps' search functions).
"""
from __future__ import annotations

from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.fields import case_sensitive_char_field, lowered
from khi_archive.lib.validators import validate_taxonomy_name

__all__ = [
    "Keyword",
    "Tag",
]

TAG_NAME_MAX_LENGTH = 128
KEYWORD_NAME_MAX_LENGTH = 191


class TaxonomyTermManager(models.Manager):
    """
    Lookups shared by Tag and Keyword.
    """
    def get_by_name(self, name: str):
        """
        Case-insensitive lookup of a single term by name.

        If more than one stored name differs only by case, the oldest wins.
        """
        return self.filter(name__lower=lowered(name.strip())).order_by("pk").first()


class Tag(models.Model):
    """
    A short label used to group content items, e.g. "history" or "کوردستان".
    """
    objects: TaxonomyTermManager = TaxonomyTermManager()

    id = models.BigAutoField(primary_key=True)
    name = case_sensitive_char_field(
        max_length=TAG_NAME_MAX_LENGTH,
        blank=False,
        validators=[validate_taxonomy_name],
        help_text=_("The tag as it was first entered."),
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["name"],
                name="khi_tax_tag_uniq_name",
            ),
        ]
        verbose_name = _("Tag")
        verbose_name_plural = _("Tags")

    def __repr__(self) -> str:
        """
        Developer-facing representation of a Tag.
        """
        return str(self)

    def __str__(self) -> str:
        """
        User-facing string representation of a Tag.
        """
        return f"<{self.__class__.__name__}> ({self.id}) {self.name}"


class Keyword(models.Model):
    """
    A search keyword. Same shape as Tag, separate namespace.
    """
    objects: TaxonomyTermManager = TaxonomyTermManager()

    id = models.BigAutoField(primary_key=True)
    name = case_sensitive_char_field(
        max_length=KEYWORD_NAME_MAX_LENGTH,
        blank=False,
        validators=[validate_taxonomy_name],
        help_text=_("The keyword as it was first entered."),
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["name"],
                name="khi_tax_kw_uniq_name",
            ),
        ]
        verbose_name = _("Keyword")
        verbose_name_plural = _("Keywords")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.name}"
