"""
Projects API

Every write here touches several tables at once (the project row, its tag and
keyword links, its media and its log), so always go through these functions
rather than mutating the models directly. Each mutation runs in a single
transaction.

No permissions are enforced here; that's the job of the REST views.
"""
from __future__ import annotations

from datetime import date, datetime
from logging import getLogger
from typing import Iterable

from django.core.exceptions import ValidationError
from django.db.models import Q, QuerySet
from django.db.transaction import atomic

from khi_archive.lib.audit import stamp_created, stamp_updated
from khi_archive.lib.choices import MediaType, parse_languages
from khi_archive.lib.fields import lowered

from ..taxonomy import api as taxonomy_api
from .data import ProjectMediaData
from .models import Project, ProjectLog, ProjectLogAction, ProjectMedia

# The public API that will be re-exported by khi_archive.api.content is listed
# in the __all__ entries below. Internal helper functions that are private to
# this module should start with an underscore.
__all__ = [
    "add_project_media",
    "create_project",
    "delete_project",
    "delete_project_media",
    "get_project",
    "get_project_logs",
    "get_project_media",
    "get_projects",
    "get_projects_by_keyword",
    "get_projects_by_tag",
    "remove_project_media",
    "replace_project_media",
    "search_projects",
    "update_project",
]

logger = getLogger(__name__)

# Scalar fields that update_project may change, and that get field-level logs.
_UPDATABLE_FIELDS = (
    "title",
    "description",
    "location",
    "project_type",
    "project_date",
    "cover_url",
)


def _clean_languages(content_languages) -> list[str]:
    try:
        return parse_languages(content_languages)
    except ValueError as exc:
        raise ValidationError({"content_languages": str(exc)}) from exc


def _build_media(project: Project, media: Iterable[ProjectMediaData]) -> list[ProjectMedia]:
    """
    Build (unsaved) ProjectMedia rows, validating each one.
    """
    rows = []
    for position, entry in enumerate(media):
        row = ProjectMedia(
            project=project,
            media_type=str(entry.get("media_type") or "").strip().upper(),
            url=entry.get("url", ""),
            caption=entry.get("caption", ""),
            sort_order=entry.get("sort_order", position),
        )
        row.full_clean()
        rows.append(row)
    return rows


def _log(project: Project, action: str, created: datetime, field_name="", old_value="", new_value="") -> ProjectLog:
    return ProjectLog.objects.create(
        project=project,
        action=action,
        field_name=field_name,
        old_value="" if old_value is None else str(old_value),
        new_value="" if new_value is None else str(new_value),
        created_at=created,
    )


def create_project(
    *,
    title: str,
    project_type: str,
    description: str = "",
    location: str = "",
    project_date: date | None = None,
    cover_url: str = "",
    content_languages: Iterable[str] = (),
    tags: Iterable[str] = (),
    keywords: Iterable[str] = (),
    media: Iterable[ProjectMediaData] = (),
    created_by=None,
    created: datetime | None = None,
) -> Project:
    """
    Create a Project along with its tags, keywords and media.

    Tag and keyword names that don't exist yet are created. Raises
    ValidationError if any field (or media entry) is invalid.
    """
    with atomic():
        project = Project(
            title=title,
            project_type=project_type,
            description=description,
            location=location,
            project_date=project_date,
            cover_url=cover_url,
            content_languages=_clean_languages(content_languages),
        )
        now = stamp_created(project, created_by, created)
        project.full_clean()
        project.save()

        project.tags.set(taxonomy_api.resolve_tags(tags))
        project.keywords.set(taxonomy_api.resolve_keywords(keywords))
        ProjectMedia.objects.bulk_create(_build_media(project, media))

        _log(project, ProjectLogAction.CREATE, now, new_value=f"Created project: {project.title}")

    logger.info("Project created | id=%s", project.pk)
    return project


def get_project(project_id: int, /) -> Project:
    """
    Get a Project with its tags, keywords and media preloaded.

    Raises Project.DoesNotExist if there is no such project.
    """
    return Project.with_relations.get(pk=project_id)


def get_projects() -> QuerySet[Project]:
    """
    All Projects, newest first.
    """
    return Project.with_relations.order_by("-pk")


def update_project(
    project_id: int,
    /,
    *,
    title: str | None = None,
    project_type: str | None = None,
    description: str | None = None,
    location: str | None = None,
    project_date: date | None = None,
    cover_url: str | None = None,
    content_languages: Iterable[str] | None = None,
    tags: Iterable[str] | None = None,
    keywords: Iterable[str] | None = None,
    media: Iterable[ProjectMediaData] | None = None,
    updated_by=None,
    updated: datetime | None = None,
) -> Project:
    """
    Update a Project. Arguments left as ``None`` are not changed.

    ``tags``, ``keywords`` and ``media`` replace the existing collections
    entirely when given. Tags and keywords that fall out of use are kept.
    """
    requested = {
        "title": title,
        "project_type": project_type,
        "description": description,
        "location": location,
        "project_date": project_date,
        "cover_url": cover_url,
    }
    with atomic():
        project = Project.objects.select_for_update().get(pk=project_id)
        now = stamp_updated(project, updated_by, updated)

        changes = []
        for field_name in _UPDATABLE_FIELDS:
            new_value = requested[field_name]
            old_value = getattr(project, field_name)
            if new_value is not None and new_value != old_value:
                setattr(project, field_name, new_value)
                changes.append((field_name, old_value, new_value))
        if content_languages is not None:
            project.content_languages = _clean_languages(content_languages)

        project.full_clean()
        project.save()

        if tags is not None:
            project.tags.set(taxonomy_api.resolve_tags(tags))
        if keywords is not None:
            project.keywords.set(taxonomy_api.resolve_keywords(keywords))
        if media is not None:
            _replace_media(project, media, now)

        for field_name, old_value, new_value in changes:
            _log(project, ProjectLogAction.UPDATE, now, field_name, old_value, new_value)
        if not changes:
            _log(project, ProjectLogAction.UPDATE, now, new_value=f"Updated project: {project.title}")

    logger.info("Project updated | id=%s fields=%s", project.pk, [change[0] for change in changes])
    return get_project(project.pk)


def delete_project(project_id: int, /) -> None:
    """
    Delete a Project, its media and its logs. Tags and Keywords are kept.

    Raises Project.DoesNotExist if there is no such project.
    """
    with atomic():
        project = Project.objects.get(pk=project_id)
        log_count, _ = ProjectLog.objects.filter(project=project).delete()
        logger.debug("Purged %s project log rows for project id=%s", log_count, project_id)
        project.delete()

    logger.info("Project deleted | id=%s", project_id)


def search_projects(text: str) -> QuerySet[Project]:
    """
    Projects whose title, or any tag, or any keyword contains ``text``.

    Matching ignores case. Projects with no tags or keywords still match on
    their title, and each project appears once no matter how many of its tags
    match. Results are ordered by primary key.

    An empty ``text`` matches every project.
    """
    needle = lowered(text)
    return (
        Project.with_relations
        .filter(
            Q(title__lower__contains=needle)
            | Q(tags__name__lower__contains=needle)
            | Q(keywords__name__lower__contains=needle)
        )
        .distinct()
        .order_by("pk")
    )


def get_projects_by_tag(tag: str) -> QuerySet[Project]:
    """
    Projects with a tag named exactly ``tag``, ignoring case.
    """
    return (
        Project.with_relations
        .filter(tags__name__lower=lowered(tag.strip()))
        .distinct()
        .order_by("pk")
    )


def get_projects_by_keyword(keyword: str) -> QuerySet[Project]:
    """
    Projects with a keyword named exactly ``keyword``, ignoring case.
    """
    return (
        Project.with_relations
        .filter(keywords__name__lower=lowered(keyword.strip()))
        .distinct()
        .order_by("pk")
    )


def get_project_media(project_id: int, /, media_type: MediaType | str | None = None) -> QuerySet[ProjectMedia]:
    """
    A Project's media in ascending ``sort_order`` (ties broken by id),
    optionally only those of one ``media_type``.
    """
    qs = ProjectMedia.objects.filter(project_id=project_id)
    if media_type is not None:
        qs = qs.filter(media_type=MediaType(media_type))
    return qs.order_by("sort_order", "id")


def add_project_media(
    project_id: int,
    /,
    media: ProjectMediaData,
    added_by=None,
    added: datetime | None = None,
) -> ProjectMedia:
    """
    Attach one media entry to a Project.

    Without an explicit ``sort_order`` the entry goes after the current last one.
    """
    with atomic():
        project = Project.objects.select_for_update().get(pk=project_id)
        if "sort_order" not in media:
            last = project.media.order_by("-sort_order").values_list("sort_order", flat=True).first()
            media = {**media, "sort_order": 0 if last is None else last + 1}
        [row] = _build_media(project, [media])
        row.save()
        now = stamp_updated(project, added_by, added)
        project.save(update_fields=["updated_at", "updated_by"])
        _log(project, ProjectLogAction.ADD_MEDIA, now, "media", new_value=row.url)
    return row


def remove_project_media(
    project_id: int,
    /,
    media_id: int,
    removed_by=None,
    removed: datetime | None = None,
) -> None:
    """
    Remove one media entry from a Project.

    Raises ProjectMedia.DoesNotExist if the media doesn't belong to this project.
    """
    with atomic():
        project = Project.objects.select_for_update().get(pk=project_id)
        row = ProjectMedia.objects.get(pk=media_id, project=project)
        url = row.url
        row.delete()
        now = stamp_updated(project, removed_by, removed)
        project.save(update_fields=["updated_at", "updated_by"])
        _log(project, ProjectLogAction.REMOVE_MEDIA, now, "media", old_value=url)


def _replace_media(project: Project, media: Iterable[ProjectMediaData], now: datetime) -> None:
    rows = _build_media(project, media)
    deleted = delete_project_media(project.pk)
    ProjectMedia.objects.bulk_create(rows)
    if deleted:
        _log(project, ProjectLogAction.REMOVE_MEDIA, now, "media", old_value=f"{deleted} item(s)")
    if rows:
        _log(project, ProjectLogAction.ADD_MEDIA, now, "media", new_value=f"{len(rows)} item(s)")


def replace_project_media(
    project_id: int,
    /,
    media: Iterable[ProjectMediaData],
    updated_by=None,
    updated: datetime | None = None,
) -> QuerySet[ProjectMedia]:
    """
    Replace all of a Project's media in one transaction. Returns the new list.
    """
    with atomic():
        project = Project.objects.select_for_update().get(pk=project_id)
        now = stamp_updated(project, updated_by, updated)
        project.save(update_fields=["updated_at", "updated_by"])
        _replace_media(project, media, now)
    return get_project_media(project_id)


def delete_project_media(project_id: int, /) -> int:
    """
    Delete every media entry owned by one Project, in bulk.

    Returns how many were deleted. Nothing outside that project is touched.
    """
    deleted, _ = ProjectMedia.objects.filter(project_id=project_id).delete()
    logger.debug("Deleted %s media rows for project id=%s", deleted, project_id)
    return deleted


def get_project_logs(project_id: int, /) -> QuerySet[ProjectLog]:
    """
    Change log for a Project, newest first.
    """
    return ProjectLog.objects.filter(project_id=project_id).order_by("-created_at", "-id")
