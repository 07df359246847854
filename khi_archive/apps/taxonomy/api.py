"""
Taxonomy API

The content apps call ``resolve_tags`` / ``resolve_keywords`` to turn the
free-text names an author typed into Tag / Keyword rows. Anything else that
needs to create or look up terms should come through here as well.

Please look at the models.py file for more information about the kinds of data
are stored in this app.
"""
from __future__ import annotations

from logging import getLogger
from typing import Iterable, TypeVar

from django.db.models import Q, QuerySet

from khi_archive.lib.fields import lowered

from .models import Keyword, Tag

# The public API that will be re-exported by khi_archive.api.content is listed
# in the __all__ entries below. Internal helper functions that are private to
# this module should start with an underscore.
__all__ = [
    "create_keyword",
    "create_tag",
    "get_keyword_by_name",
    "get_keywords",
    "get_keywords_by_names",
    "get_tag_by_name",
    "get_tags",
    "get_tags_by_names",
    "name_matches_any",
    "normalize_names",
    "resolve_keywords",
    "resolve_tags",
    "search_keywords",
    "search_tags",
]

logger = getLogger(__name__)

TermT = TypeVar("TermT", Tag, Keyword)


def normalize_names(names: Iterable[str] | None) -> list[str]:
    """
    Strip whitespace, drop blanks and exact duplicates, keep first-seen order.
    """
    normalized: list[str] = []
    for name in names or []:
        if name is None:
            continue
        name = str(name).strip()
        if name and name not in normalized:
            normalized.append(name)
    return normalized


def name_matches_any(names: Iterable[str] | None, relation: str = "") -> Q:
    """
    A Q matching rows whose ``<relation>name`` equals any of ``names``, ignoring case.

    ``relation`` is the lookup path to the term, with its trailing ``__``, e.g.
    ``"tags__"``. An empty list of names gives a Q that matches nothing.
    """
    query = Q(pk__in=[])
    for name in normalize_names(names):
        query |= Q(**{f"{relation}name__lower": lowered(name)})
    return query


def _filter_by_names(queryset: QuerySet[TermT], names: Iterable[str]) -> QuerySet[TermT]:
    return queryset.filter(name_matches_any(names)).order_by("pk")


def _resolve(model: type[TermT], names: Iterable[str] | None) -> list[TermT]:
    """
    Look up terms by exact name, creating whichever ones don't exist yet.
    """
    wanted = normalize_names(names)
    if not wanted:
        return []

    existing = {term.name: term for term in model.objects.filter(name__in=wanted)}
    resolved = []
    for name in wanted:
        term = existing.get(name)
        if term is None:
            term = model(name=name)
            term.full_clean()
            term.save()
            logger.info("%s created | id=%s name=%r", model.__name__, term.pk, name)
        resolved.append(term)
    return resolved


def resolve_tags(names: Iterable[str] | None) -> list[Tag]:
    """
    Return a Tag for each distinct name, creating the ones that are missing.

    Names are matched exactly (case-sensitive) after stripping whitespace.
    The result is in the same order as the input names.
    """
    return _resolve(Tag, names)


def resolve_keywords(names: Iterable[str] | None) -> list[Keyword]:
    """
    Return a Keyword for each distinct name, creating the ones that are missing.
    """
    return _resolve(Keyword, names)


def create_tag(name: str) -> Tag:
    """
    Create a single Tag, without checking whether it already exists.

    A duplicate name raises ``django.db.IntegrityError`` from the database's
    unique constraint. Most callers want ``resolve_tags`` instead.
    """
    tag = Tag(name=name)
    tag.full_clean(validate_constraints=False)
    tag.save()
    return tag


def create_keyword(name: str) -> Keyword:
    """
    Create a single Keyword, without checking whether it already exists.
    """
    keyword = Keyword(name=name)
    keyword.full_clean(validate_constraints=False)
    keyword.save()
    return keyword


def get_tag_by_name(name: str) -> Tag | None:
    """
    Case-insensitive lookup of a Tag, or None if there isn't one.
    """
    return Tag.objects.get_by_name(name)


def get_keyword_by_name(name: str) -> Keyword | None:
    """
    Case-insensitive lookup of a Keyword, or None if there isn't one.
    """
    return Keyword.objects.get_by_name(name)


def get_tags_by_names(names: Iterable[str]) -> QuerySet[Tag]:
    """
    All Tags whose name matches any of ``names``, ignoring case.
    """
    return _filter_by_names(Tag.objects.all(), names)


def get_keywords_by_names(names: Iterable[str]) -> QuerySet[Keyword]:
    """
    All Keywords whose name matches any of ``names``, ignoring case.
    """
    return _filter_by_names(Keyword.objects.all(), names)


def get_tags() -> QuerySet[Tag]:
    return Tag.objects.order_by("name", "pk")


def get_keywords() -> QuerySet[Keyword]:
    return Keyword.objects.order_by("name", "pk")


def search_tags(search_term: str) -> QuerySet[Tag]:
    """
    Tags containing ``search_term`` anywhere in their name, ignoring case.
    """
    return get_tags().filter(name__lower__contains=lowered(search_term))


def search_keywords(search_term: str) -> QuerySet[Keyword]:
    """
    Keywords containing ``search_term`` anywhere in their name, ignoring case.
    """
    return get_keywords().filter(name__lower__contains=lowered(search_term))
