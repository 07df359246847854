"""
Projects are the institute's own undertakings (exhibitions, field research,
restorations...). Each one has a single title, a free-form type, a set of
shared Tags and Keywords, and an ordered list of media it exclusively owns.

Media order is explicit: ``ProjectMedia.sort_order`` decides it, with the
primary key as a tie-breaker. Insertion order means nothing.
"""
from __future__ import annotations

from django.db import models
from django.utils.translation import gettext_lazy as _

from khi_archive.lib.audit import AuditedMixin
from khi_archive.lib.choices import MediaType
from khi_archive.lib.fields import case_insensitive_char_field, content_text_field, manual_date_time_field, url_field
from khi_archive.lib.managers import WithRelationsManager

from ..taxonomy.models import Keyword, Tag

__all__ = [
    "Project",
    "ProjectLog",
    "ProjectLogAction",
    "ProjectMedia",
]


class Project(AuditedMixin):
    """
    A single project and its shared metadata.
    """
    objects = models.Manager()
    with_relations = WithRelationsManager(prefetch=("tags", "keywords", "media"))

    id = models.BigAutoField(primary_key=True)

    title = case_insensitive_char_field(
        max_length=255,
        blank=False,
        help_text=_("Display title of the project."),
    )
    description = content_text_field(max_length=20_000)
    location = case_insensitive_char_field(max_length=255, blank=True, default="")

    project_type = models.CharField(
        max_length=64,
        blank=False,
        help_text=_("Free-form project type, e.g. 'exhibition' or 'research'."),
    )
    project_date = models.DateField(null=True, blank=True)
    cover_url = url_field()

    # List of Language values ("CKB", "KMR") this project has content in.
    content_languages = models.JSONField(default=list, blank=True)

    tags: models.ManyToManyField[Tag, models.Model] = models.ManyToManyField(
        Tag,
        related_name="projects",
        blank=True,
    )
    keywords: models.ManyToManyField[Keyword, models.Model] = models.ManyToManyField(
        Keyword,
        related_name="projects",
        blank=True,
    )

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="khi_proj_idx_title"),
            models.Index(fields=["project_type"], name="khi_proj_idx_type"),
            models.Index(fields=["project_date"], name="khi_proj_idx_date"),
        ]
        verbose_name = _("Project")
        verbose_name_plural = _("Projects")

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.title}"


class ProjectMedia(models.Model):
    """
    A media file (or link) attached to a single Project.

    Deleted with its Project.
    """
    id = models.BigAutoField(primary_key=True)
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="media",
    )
    media_type = models.CharField(max_length=20, choices=MediaType.choices)
    url = url_field()
    caption = models.CharField(max_length=255, blank=True, default="")
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]
        indexes = [
            models.Index(fields=["project", "sort_order"], name="khi_pm_idx_project_order"),
            models.Index(fields=["media_type"], name="khi_pm_idx_type"),
        ]
        verbose_name = _("Project Media")
        verbose_name_plural = _("Project Media")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.media_type} #{self.sort_order}"


class ProjectLogAction(models.TextChoices):
    """
    What happened to a Project.
    """
    CREATE = "CREATE", _("Create")
    UPDATE = "UPDATE", _("Update")
    ADD_MEDIA = "ADD_MEDIA", _("Add media")
    REMOVE_MEDIA = "REMOVE_MEDIA", _("Remove media")


class ProjectLog(models.Model):
    """
    One row per change to a Project. Field-level updates record the old and
    new values; other actions leave them blank.
    """
    id = models.BigAutoField(primary_key=True)
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="logs",
    )
    action = models.CharField(max_length=50, choices=ProjectLogAction.choices)
    field_name = models.CharField(max_length=50, blank=True, default="")
    old_value = content_text_field()
    new_value = content_text_field()
    created_at = manual_date_time_field()

    class Meta:
        indexes = [
            models.Index(fields=["project", "created_at"], name="khi_plog_idx_project_created"),
        ]
        verbose_name = _("Project Log")
        verbose_name_plural = _("Project Logs")

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}> ({self.id}) {self.action} project:{self.project_id}"
