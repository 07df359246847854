"""
Writings API

Writings keep their content, tags and keywords per language, so most lookups
here take a ``language`` argument (a ``Language`` or any string
``Language.parse`` accepts). Functions that only make sense for one language
have the language suffix in their name, e.g. ``get_writings_by_tag_ckb``.
"""
from __future__ import annotations

from datetime import datetime
from logging import getLogger
from typing import Iterable

from django.core.exceptions import ValidationError
from django.db.models import Q, QuerySet
from django.db.transaction import atomic

from khi_archive.lib.audit import actor_name, stamp_created, stamp_updated, utc_now
from khi_archive.lib.choices import Language, parse_languages
from khi_archive.lib.fields import lowered

from ..taxonomy import api as taxonomy_api
from .data import WritingContentData
from .models import CONTENT_FIELDS, Writing, WritingLog, WritingLogAction, WritingTopic

# The public API that will be re-exported by khi_archive.api.content is listed
# in the __all__ entries below. Internal helper functions that are private to
# this module should start with an underscore.
__all__ = [
    "create_writing",
    "delete_writing",
    "filter_writings",
    "get_writing",
    "get_writing_logs",
    "get_writings",
    "get_writings_by_institute",
    "get_writings_by_keyword",
    "get_writings_by_keyword_ckb",
    "get_writings_by_keyword_kmr",
    "get_writings_by_tag",
    "get_writings_by_tag_ckb",
    "get_writings_by_tag_kmr",
    "get_writings_by_topic",
    "get_writings_by_writer_exact",
    "search_writings",
    "search_writings_by_writer",
    "update_writing",
]

logger = getLogger(__name__)


def _language(value) -> Language:
    """
    Parse a required language argument, raising ValidationError if it's bad.
    """
    try:
        language = Language.parse(value)
    except ValueError as exc:
        raise ValidationError({"language": str(exc)}) from exc
    if language is None:
        raise ValidationError({"language": "A language is required."})
    return language


def _clean_languages(content_languages) -> list[str]:
    try:
        return parse_languages(content_languages)
    except ValueError as exc:
        raise ValidationError({"content_languages": str(exc)}) from exc


def _apply_content(writing: Writing, language: Language, content: WritingContentData | None) -> list[str]:
    """
    Copy one content block onto the writing's per-language columns.

    Returns the names of the columns whose value actually changed.
    """
    changed = []
    for key, value in (content or {}).items():
        if key not in CONTENT_FIELDS:
            raise ValidationError({key: f"Unknown writing content field for {language.value}."})
        field_name = f"{key}_{language.suffix}"
        if key == "file_format" and value:
            value = str(value).strip().upper()
        if getattr(writing, field_name) != value:
            setattr(writing, field_name, value)
            changed.append(field_name)
    return changed


def _log(
    writing: Writing,
    action: str,
    created: datetime,
    actor=None,
    request_id: str = "",
    details: str = "",
    meta: dict | None = None,
) -> WritingLog:
    return WritingLog.objects.create(
        writing=writing if writing.pk else None,
        writing_ref=writing.pk if writing.pk else meta["writing_id"],
        action=action,
        actor_id=str(getattr(actor, "pk", "") or ""),
        actor_name=actor_name(actor),
        request_id=request_id,
        meta=meta or {},
        details=details,
        created_at=created,
    )


def _set_taxonomy(writing: Writing, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr) -> None:
    """
    Replace whichever of the four tag/keyword sets were given (not None).
    """
    if tags_ckb is not None:
        writing.tags_ckb.set(taxonomy_api.resolve_tags(tags_ckb))
    if tags_kmr is not None:
        writing.tags_kmr.set(taxonomy_api.resolve_tags(tags_kmr))
    if keywords_ckb is not None:
        writing.keywords_ckb.set(taxonomy_api.resolve_keywords(keywords_ckb))
    if keywords_kmr is not None:
        writing.keywords_kmr.set(taxonomy_api.resolve_keywords(keywords_kmr))


def create_writing(
    *,
    content_languages: Iterable[str],
    ckb_content: WritingContentData | None = None,
    kmr_content: WritingContentData | None = None,
    writing_topic: str = "",
    published_by_institute: bool = False,
    tags_ckb: Iterable[str] = (),
    tags_kmr: Iterable[str] = (),
    keywords_ckb: Iterable[str] = (),
    keywords_kmr: Iterable[str] = (),
    created_by=None,
    created: datetime | None = None,
    request_id: str = "",
) -> Writing:
    """
    Create a Writing with its content blocks and per-language taxonomy.

    Every language in ``content_languages`` needs a content block with a
    title, or ValidationError is raised.
    """
    with atomic():
        writing = Writing(
            content_languages=_clean_languages(content_languages),
            writing_topic=(writing_topic or "").strip().upper(),
            published_by_institute=published_by_institute,
        )
        _apply_content(writing, Language.CKB, ckb_content)
        _apply_content(writing, Language.KMR, kmr_content)
        now = stamp_created(writing, created_by, created)
        writing.full_clean()
        writing.save()

        _set_taxonomy(writing, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr)
        _log(
            writing,
            WritingLogAction.CREATED,
            now,
            actor=created_by,
            request_id=request_id,
            details=f"Created writing: {writing.display_title}",
        )

    logger.info("Writing created | id=%s", writing.pk)
    return writing


def get_writing(writing_id: int, /) -> Writing:
    """
    Get a Writing with all four tag/keyword sets preloaded.

    Raises Writing.DoesNotExist if there is no such writing.
    """
    return Writing.with_relations.get(pk=writing_id)


def get_writings() -> QuerySet[Writing]:
    """
    All Writings, newest first.
    """
    return Writing.with_relations.order_by("-pk")


def update_writing(
    writing_id: int,
    /,
    *,
    content_languages: Iterable[str] | None = None,
    ckb_content: WritingContentData | None = None,
    kmr_content: WritingContentData | None = None,
    writing_topic: str | None = None,
    published_by_institute: bool | None = None,
    tags_ckb: Iterable[str] | None = None,
    tags_kmr: Iterable[str] | None = None,
    keywords_ckb: Iterable[str] | None = None,
    keywords_kmr: Iterable[str] | None = None,
    updated_by=None,
    updated: datetime | None = None,
    request_id: str = "",
) -> Writing:
    """
    Partially update a Writing. Arguments left as ``None`` are not changed.

    Content blocks are merged key by key, so ``ckb_content={"genre": "novel"}``
    only touches ``genre_ckb``. Tag and keyword lists replace their set.
    """
    with atomic():
        writing = Writing.objects.select_for_update().get(pk=writing_id)
        changed = []
        if content_languages is not None:
            languages = _clean_languages(content_languages)
            if languages != writing.content_languages:
                writing.content_languages = languages
                changed.append("content_languages")
        changed += _apply_content(writing, Language.CKB, ckb_content)
        changed += _apply_content(writing, Language.KMR, kmr_content)
        if writing_topic is not None and writing_topic.strip().upper() != writing.writing_topic:
            writing.writing_topic = writing_topic.strip().upper()
            changed.append("writing_topic")
        if published_by_institute is not None and published_by_institute != writing.published_by_institute:
            writing.published_by_institute = published_by_institute
            changed.append("published_by_institute")

        now = stamp_updated(writing, updated_by, updated)
        writing.full_clean()
        writing.save()
        _set_taxonomy(writing, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr)

        _log(
            writing,
            WritingLogAction.UPDATED,
            now,
            actor=updated_by,
            request_id=request_id,
            details=f"Updated writing: {writing.display_title}",
            meta={"changed_fields": changed},
        )

    logger.info("Writing updated | id=%s fields=%s", writing.pk, changed)
    return get_writing(writing.pk)


def delete_writing(
    writing_id: int,
    /,
    deleted_by=None,
    deleted: datetime | None = None,
    request_id: str = "",
) -> None:
    """
    Delete a Writing and its earlier log entries, leaving one DELETED entry.

    Tags and Keywords are kept. Raises Writing.DoesNotExist if there is no
    such writing.
    """
    with atomic():
        writing = Writing.objects.get(pk=writing_id)
        title = writing.display_title
        log_count, _ = WritingLog.objects.filter(writing_ref=writing_id).delete()
        logger.debug("Purged %s writing log rows for writing id=%s", log_count, writing_id)
        writing.delete()
        _log(
            writing,
            WritingLogAction.DELETED,
            deleted or utc_now(),
            actor=deleted_by,
            request_id=request_id,
            details=f"Deleted writing: {title}",
            meta={"writing_id": writing_id},
        )

    logger.info("Writing deleted | id=%s", writing_id)


def get_writing_logs(writing_id: int, /) -> QuerySet[WritingLog]:
    """
    Audit trail of a Writing (including its DELETED entry), newest first.
    """
    return WritingLog.objects.filter(writing_ref=writing_id).order_by("-created_at", "-id")


def _by_taxonomy(relation: str, name: str) -> QuerySet[Writing]:
    return (
        Writing.with_relations
        .filter(**{f"{relation}__name__lower": lowered(name.strip())})
        .distinct()
        .order_by("pk")
    )


def get_writings_by_tag_ckb(tag: str) -> QuerySet[Writing]:
    """
    Writings whose Sorani tags include exactly ``tag`` (ignoring case).

    Kurmanji tags are not looked at.
    """
    return _by_taxonomy("tags_ckb", tag)


def get_writings_by_tag_kmr(tag: str) -> QuerySet[Writing]:
    """
    Writings whose Kurmanji tags include exactly ``tag`` (ignoring case).
    """
    return _by_taxonomy("tags_kmr", tag)


def get_writings_by_keyword_ckb(keyword: str) -> QuerySet[Writing]:
    return _by_taxonomy("keywords_ckb", keyword)


def get_writings_by_keyword_kmr(keyword: str) -> QuerySet[Writing]:
    return _by_taxonomy("keywords_kmr", keyword)


def get_writings_by_tag(tag: str) -> QuerySet[Writing]:
    """
    Writings tagged exactly ``tag`` (ignoring case) in either language.
    """
    needle = lowered(tag.strip())
    return (
        Writing.with_relations
        .filter(Q(tags_ckb__name__lower=needle) | Q(tags_kmr__name__lower=needle))
        .distinct()
        .order_by("pk")
    )


def get_writings_by_keyword(keyword: str) -> QuerySet[Writing]:
    """
    Writings with the keyword ``keyword`` (ignoring case) in either language.
    """
    needle = lowered(keyword.strip())
    return (
        Writing.with_relations
        .filter(Q(keywords_ckb__name__lower=needle) | Q(keywords_kmr__name__lower=needle))
        .distinct()
        .order_by("pk")
    )


def search_writings(text: str) -> QuerySet[Writing]:
    """
    Writings whose title (either language) or any tag or keyword (either
    language) contains ``text``, ignoring case. Ordered by primary key.
    """
    needle = lowered(text)
    return (
        Writing.with_relations
        .filter(
            Q(title_ckb__lower__contains=needle)
            | Q(title_kmr__lower__contains=needle)
            | Q(tags_ckb__name__lower__contains=needle)
            | Q(tags_kmr__name__lower__contains=needle)
            | Q(keywords_ckb__name__lower__contains=needle)
            | Q(keywords_kmr__name__lower__contains=needle)
        )
        .distinct()
        .order_by("pk")
    )


def search_writings_by_writer(text: str, language=None) -> QuerySet[Writing]:
    """
    Writings whose writer contains ``text``, ignoring case.

    With a ``language``, only that language's writer is checked; without
    one, either language may match.
    """
    needle = lowered(text)
    if language is None:
        condition = Q(writer_ckb__lower__contains=needle) | Q(writer_kmr__lower__contains=needle)
    else:
        condition = Q(**{f"writer_{_language(language).suffix}__lower__contains": needle})
    return Writing.with_relations.filter(condition).order_by("pk")


def get_writings_by_writer_exact(name: str, language) -> QuerySet[Writing]:
    """
    Writings whose writer in ``language`` is exactly ``name``, ignoring case.
    """
    field_name = f"writer_{_language(language).suffix}"
    return Writing.with_relations.filter(**{f"{field_name}__lower": lowered(name.strip())}).order_by("pk")


def get_writings_by_topic(topic: WritingTopic | str) -> QuerySet[Writing]:
    return Writing.with_relations.filter(writing_topic=str(topic).strip().upper()).order_by("pk")


def get_writings_by_institute(published_by_institute: bool = True) -> QuerySet[Writing]:
    return Writing.with_relations.filter(published_by_institute=published_by_institute).order_by("pk")


def filter_writings(
    topic: WritingTopic | str | None = None,
    institute_only: bool | None = None,
    writer: str | None = None,
) -> QuerySet[Writing]:
    """
    Combine the topic, institute and writer filters. ``None`` means "don't
    filter on this"; ``institute_only=False`` also means no institute filter.

    The writer filter is a substring match against either language.
    """
    qs = Writing.with_relations.all()
    if topic:
        qs = qs.filter(writing_topic=str(topic).strip().upper())
    if institute_only:
        qs = qs.filter(published_by_institute=True)
    if writer:
        needle = lowered(writer)
        qs = qs.filter(Q(writer_ckb__lower__contains=needle) | Q(writer_kmr__lower__contains=needle))
    return qs.order_by("pk")
