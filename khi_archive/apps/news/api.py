"""
News API

Covers News items, their media and audit log, and the category /
sub-category reference data. As with the other content apps, all writes go
through here so that audit fields and log rows stay in step with the data.
"""
from __future__ import annotations

from datetime import date, datetime
from logging import getLogger
from typing import Iterable

from django.core.exceptions import ValidationError
from django.db.models import Q, QuerySet
from django.db.transaction import atomic

from khi_archive.lib.audit import actor_name, stamp_created, stamp_updated
from khi_archive.lib.choices import Language, MediaType, parse_languages
from khi_archive.lib.fields import lowered

from ..taxonomy import api as taxonomy_api
from .data import NewsContentData, NewsMediaData
from .models import News, NewsAuditLog, NewsCategory, NewsMedia, NewsSubCategory

# The public API that will be re-exported by khi_archive.api.content is listed
# in the __all__ entries below. Internal helper functions that are private to
# this module should start with an underscore.
__all__ = [
    "create_news",
    "create_news_category",
    "create_news_sub_category",
    "delete_news",
    "delete_news_media",
    "get_news",
    "get_news_audit_logs",
    "get_news_by_category_name",
    "get_news_by_sub_category_name",
    "get_news_by_tag",
    "get_news_by_tags",
    "get_news_category_by_name",
    "get_news_media",
    "get_news_ordered",
    "get_or_create_news_category",
    "get_or_create_news_sub_category",
    "search_news",
    "update_news",
]

logger = getLogger(__name__)


def _language(value) -> Language:
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


def _apply_content(news: News, language: Language, content: NewsContentData | None) -> list[str]:
    changed = []
    for key, value in (content or {}).items():
        if key not in ("title", "description"):
            raise ValidationError({key: f"Unknown news content field for {language.value}."})
        field_name = f"{key}_{language.suffix}"
        if getattr(news, field_name) != value:
            setattr(news, field_name, value)
            changed.append(field_name)
    return changed


def _build_media(news: News, media: Iterable[NewsMediaData], now: datetime) -> list[NewsMedia]:
    rows = []
    for entry in media:
        row = NewsMedia(
            news=news,
            media_type=str(entry.get("media_type") or "").strip().upper(),
            url=entry.get("url", ""),
            external_url=entry.get("external_url", ""),
            embed_url=entry.get("embed_url", ""),
            sort_order=entry.get("sort_order", 0),
            created_at=now,
        )
        row.full_clean()
        rows.append(row)
    return rows


def _audit(news: News, action: str, now: datetime, actor=None, note: str = "") -> NewsAuditLog:
    return NewsAuditLog.objects.create(
        news=news,
        action=action,
        performed_by=actor_name(actor),
        note=note,
        action_time=now,
    )


def _set_taxonomy(news: News, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr) -> None:
    if tags_ckb is not None:
        news.tags_ckb.set(taxonomy_api.resolve_tags(tags_ckb))
    if tags_kmr is not None:
        news.tags_kmr.set(taxonomy_api.resolve_tags(tags_kmr))
    if keywords_ckb is not None:
        news.keywords_ckb.set(taxonomy_api.resolve_keywords(keywords_ckb))
    if keywords_kmr is not None:
        news.keywords_kmr.set(taxonomy_api.resolve_keywords(keywords_kmr))


def _clear_unlisted_content(news: News) -> list[str]:
    """
    Blank the title and description of every language not in ``content_languages``.
    """
    changed = []
    for language in Language:
        if language.value not in news.content_languages:
            changed += _apply_content(news, language, {"title": "", "description": ""})
    return changed


def _clear_unlisted_taxonomy(news: News) -> None:
    for language in Language:
        if language.value not in news.content_languages:
            getattr(news, f"tags_{language.suffix}").clear()
            getattr(news, f"keywords_{language.suffix}").clear()


# Categories

def create_news_category(name_ckb: str, name_kmr: str = "") -> NewsCategory:
    """
    Create a NewsCategory. A duplicate Sorani name raises ValidationError.
    """
    category = NewsCategory(name_ckb=name_ckb.strip(), name_kmr=name_kmr.strip())
    category.full_clean()
    category.save()
    logger.info("News category created | id=%s", category.pk)
    return category


def get_news_category_by_name(name_ckb: str) -> NewsCategory | None:
    """
    Case-insensitive lookup by Sorani name, or None.
    """
    return NewsCategory.objects.filter(name_ckb__lower=lowered(name_ckb.strip())).order_by("pk").first()


def get_or_create_news_category(name_ckb: str, name_kmr: str = "") -> NewsCategory:
    """
    Return the category with this Sorani name, creating it if needed.

    An existing category keeps its Kurmanji name.
    """
    with atomic():
        category = get_news_category_by_name(name_ckb)
        if category is None:
            category = create_news_category(name_ckb, name_kmr)
    return category


def create_news_sub_category(category: NewsCategory, name_ckb: str, name_kmr: str = "") -> NewsSubCategory:
    sub_category = NewsSubCategory(category=category, name_ckb=name_ckb.strip(), name_kmr=name_kmr.strip())
    sub_category.full_clean()
    sub_category.save()
    logger.info("News sub-category created | id=%s category=%s", sub_category.pk, category.pk)
    return sub_category


def get_or_create_news_sub_category(category: NewsCategory, name_ckb: str, name_kmr: str = "") -> NewsSubCategory:
    """
    Return the sub-category of ``category`` with this Sorani name, creating
    it if needed.
    """
    with atomic():
        sub_category = (
            NewsSubCategory.objects
            .filter(category=category, name_ckb__lower=lowered(name_ckb.strip()))
            .order_by("pk")
            .first()
        )
        if sub_category is None:
            sub_category = create_news_sub_category(category, name_ckb, name_kmr)
    return sub_category


# News items

def create_news(
    *,
    content_languages: Iterable[str],
    ckb_content: NewsContentData | None = None,
    kmr_content: NewsContentData | None = None,
    cover_url: str = "",
    date_published: date | None = None,
    category: NewsCategory | None = None,
    sub_category: NewsSubCategory | None = None,
    tags_ckb: Iterable[str] = (),
    tags_kmr: Iterable[str] = (),
    keywords_ckb: Iterable[str] = (),
    keywords_kmr: Iterable[str] = (),
    media: Iterable[NewsMediaData] = (),
    created_by=None,
    created: datetime | None = None,
) -> News:
    """
    Create a News item with its content, taxonomy and media.

    ``date_published`` defaults to today (UTC). If only ``sub_category`` is
    given, the category is taken from it; if both are given they must agree.
    """
    with atomic():
        news = News(
            content_languages=_clean_languages(content_languages),
            cover_url=cover_url,
            category=category,
            sub_category=sub_category,
        )
        _apply_content(news, Language.CKB, ckb_content)
        _apply_content(news, Language.KMR, kmr_content)
        _clear_unlisted_content(news)
        now = stamp_created(news, created_by, created)
        news.date_published = date_published or now.date()
        news.full_clean()
        news.save()

        _set_taxonomy(news, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr)
        _clear_unlisted_taxonomy(news)
        NewsMedia.objects.bulk_create(_build_media(news, media, now))
        _audit(news, "CREATE", now, created_by)

    logger.info("News created | id=%s", news.pk)
    return news


def get_news(news_id: int, /) -> News:
    """
    Get a News item with categories, taxonomy and media preloaded.

    Raises News.DoesNotExist if there is no such item.
    """
    return News.with_relations.get(pk=news_id)


def get_news_ordered() -> QuerySet[News]:
    """
    All News, most recently published first (then most recently created).
    """
    return News.with_relations.order_by("-date_published", "-created_at", "-pk")


def update_news(
    news_id: int,
    /,
    *,
    content_languages: Iterable[str] | None = None,
    ckb_content: NewsContentData | None = None,
    kmr_content: NewsContentData | None = None,
    cover_url: str | None = None,
    date_published: date | None = None,
    category: NewsCategory | None = None,
    sub_category: NewsSubCategory | None = None,
    tags_ckb: Iterable[str] | None = None,
    tags_kmr: Iterable[str] | None = None,
    keywords_ckb: Iterable[str] | None = None,
    keywords_kmr: Iterable[str] | None = None,
    media: Iterable[NewsMediaData] | None = None,
    updated_by=None,
    updated: datetime | None = None,
) -> News:
    """
    Partially update a News item. Arguments left as ``None`` are not changed;
    tag, keyword and media lists replace the existing ones.
    """
    with atomic():
        news = News.objects.select_for_update().get(pk=news_id)
        changed = []
        if content_languages is not None:
            news.content_languages = _clean_languages(content_languages)
            changed.append("content_languages")
        changed += _apply_content(news, Language.CKB, ckb_content)
        changed += _apply_content(news, Language.KMR, kmr_content)
        changed += _clear_unlisted_content(news)
        if cover_url is not None:
            news.cover_url = cover_url
            changed.append("cover_url")
        if date_published is not None:
            news.date_published = date_published
            changed.append("date_published")
        if category is not None:
            news.category = category
            changed.append("category")
        if sub_category is not None:
            news.sub_category = sub_category
            changed.append("sub_category")

        now = stamp_updated(news, updated_by, updated)
        news.full_clean()
        news.save()
        _set_taxonomy(news, tags_ckb, tags_kmr, keywords_ckb, keywords_kmr)
        _clear_unlisted_taxonomy(news)
        if media is not None:
            rows = _build_media(news, media, now)
            delete_news_media(news.pk)
            NewsMedia.objects.bulk_create(rows)
            changed.append("media")

        _audit(news, "UPDATE", now, updated_by, note=", ".join(changed))

    logger.info("News updated | id=%s fields=%s", news.pk, changed)
    return get_news(news.pk)


def delete_news(news_id: int, /) -> None:
    """
    Delete a News item with its media and audit log. Tags, Keywords and
    categories are kept.
    """
    with atomic():
        news = News.objects.get(pk=news_id)
        log_count, _ = NewsAuditLog.objects.filter(news=news).delete()
        logger.debug("Purged %s news audit rows for news id=%s", log_count, news_id)
        delete_news_media(news_id)
        news.delete()

    logger.info("News deleted | id=%s", news_id)


def get_news_audit_logs(news_id: int, /) -> QuerySet[NewsAuditLog]:
    return NewsAuditLog.objects.filter(news_id=news_id).order_by("-action_time", "-id")


# Media

def get_news_media(news_id: int, /, media_type: MediaType | str | None = None) -> QuerySet[NewsMedia]:
    """
    A News item's media in ascending ``sort_order`` (ties broken by id),
    optionally only those of one ``media_type``.
    """
    qs = NewsMedia.objects.filter(news_id=news_id)
    if media_type is not None:
        qs = qs.filter(media_type=MediaType(media_type))
    return qs.order_by("sort_order", "id")


def delete_news_media(news_id: int, /) -> int:
    """
    Delete every media entry owned by one News item, in bulk. Returns the count.
    """
    deleted, _ = NewsMedia.objects.filter(news_id=news_id).delete()
    logger.debug("Deleted %s media rows for news id=%s", deleted, news_id)
    return deleted


# Search

def search_news(text: str, language) -> QuerySet[News]:
    """
    News whose title, description, tags or keywords in ``language`` contain
    ``text``, ignoring case. Most recently published first.

    The other language's content is not searched.
    """
    suffix = _language(language).suffix
    needle = lowered(text)
    return (
        News.with_relations
        .filter(
            Q(**{f"title_{suffix}__lower__contains": needle})
            | Q(**{f"description_{suffix}__lower__contains": needle})
            | Q(**{f"tags_{suffix}__name__lower__contains": needle})
            | Q(**{f"keywords_{suffix}__name__lower__contains": needle})
        )
        .distinct()
        .order_by("-date_published", "-pk")
    )


def get_news_by_tag(tag: str, language) -> QuerySet[News]:
    """
    News with a ``language`` tag named exactly ``tag``, ignoring case.
    """
    suffix = _language(language).suffix
    return (
        News.with_relations
        .filter(**{f"tags_{suffix}__name__lower": lowered(tag.strip())})
        .distinct()
        .order_by("-date_published", "-pk")
    )


def get_news_by_tags(tags: Iterable[str], language) -> QuerySet[News]:
    """
    News with any of ``tags`` (exact, ignoring case) among its ``language`` tags.
    """
    suffix = _language(language).suffix
    return (
        News.with_relations
        .filter(taxonomy_api.name_matches_any(tags, relation=f"tags_{suffix}__"))
        .distinct()
        .order_by("-date_published", "-pk")
    )


def get_news_by_category_name(name: str, language) -> QuerySet[News]:
    """
    News whose category is named ``name`` in ``language``, ignoring case.
    """
    suffix = _language(language).suffix
    return (
        News.with_relations
        .filter(**{f"category__name_{suffix}__lower": lowered(name.strip())})
        .order_by("-date_published", "-pk")
    )


def get_news_by_sub_category_name(name: str, language) -> QuerySet[News]:
    suffix = _language(language).suffix
    return (
        News.with_relations
        .filter(**{f"sub_category__name_{suffix}__lower": lowered(name.strip())})
        .order_by("-date_published", "-pk")
    )
